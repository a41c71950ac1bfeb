"""Shared fixtures: a Bridge wired to mocked sdb, file lister and logger."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from tizenbridge.core.bridge import Bridge, BridgeConfig
from tizenbridge.core.file_lister import FileLister
from tizenbridge.core.sdb import SdbWrapper

CONFIG_XML = """<?xml version="1.0" encoding="UTF-8"?>
<widget xmlns="http://www.w3.org/ns/widgets"
        xmlns:tizen="http://tizen.org/ns/widgets"
        id="http://example.com/apps/sample" version="1.0.0">
  <tizen:application id="abcde12345.Sample" package="abcde12345"
                     required_version="2.2"/>
  <content src="index.html"/>
  <name>Sample</name>
</widget>
"""


@pytest.fixture
def sdb():
    """Mock sdb wrapper; every command succeeds with empty output."""
    mock = AsyncMock(spec=SdbWrapper)
    mock.shell.return_value = ""
    mock.push.return_value = ""
    mock.forward.return_value = ""
    mock.root.return_value = ""
    return mock


@pytest.fixture
def file_lister():
    mock = AsyncMock(spec=FileLister)
    mock.list.side_effect = lambda spec: [spec] if isinstance(spec, str) else spec
    return mock


@pytest.fixture
def logger():
    return MagicMock()


@pytest.fixture
def browser_launcher():
    return AsyncMock(return_value="")


@pytest.fixture
def bridge(sdb, file_lister, logger, browser_launcher):
    return Bridge(
        BridgeConfig(
            sdb=sdb,
            file_lister=file_lister,
            logger=logger,
            browser_launcher=browser_launcher,
            app_script_path="/home/developer/tizen-app.sh",
            app_script_local="scripts/tizen-app.sh",
            app_script_dir="/home/developer/",
        )
    )


@pytest.fixture
def config_xml(tmp_path):
    """A widget config.xml on disk."""
    path = tmp_path / "config.xml"
    path.write_text(CONFIG_XML)
    return path
