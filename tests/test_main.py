# tests/test_main.py
import json
from unittest.mock import patch, MagicMock

from apifs.api_adapter import ApiAdapter
from apifs.exceptions import RemoteOperationError
from apifs.filesystem import Filesystem
from apifs.main import build_parser, initialize_adapter, main, run_command


def test_initialize_adapter_uses_settings(mock_settings):
    """The adapter is built from the base URL, timeout and TLS flag in settings."""
    mock_settings.API_VERIFY_SSL = False

    adapter = initialize_adapter(mock_settings)

    assert isinstance(adapter, ApiAdapter)
    assert adapter.base_url == "http://storage.test/api"
    assert adapter.timeout == 5.0
    assert adapter.verify is False


def test_run_command_write_then_read(fake_session, capsys):
    filesystem = Filesystem(ApiAdapter("http://storage.test/api", session=fake_session))
    parser = build_parser()

    assert run_command(filesystem, parser.parse_args(["write", "a.txt", "hello"])) == 0
    assert run_command(filesystem, parser.parse_args(["read", "a.txt"])) == 0

    assert capsys.readouterr().out.splitlines() == ["True", "hello"]


def test_run_command_ls_prints_json(fake_session, capsys):
    fake_session.files["docs/a.txt"] = "a"
    filesystem = Filesystem(ApiAdapter("http://storage.test/api", session=fake_session))

    exit_code = run_command(filesystem, build_parser().parse_args(["ls", "docs", "--recursive"]))

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out) == [{"type": "file", "path": "docs/a.txt"}]


def test_run_command_returns_error_code_on_failure():
    filesystem = MagicMock(spec=Filesystem)
    filesystem.read.side_effect = RemoteOperationError("not found", 200)

    exit_code = run_command(filesystem, build_parser().parse_args(["read", "missing.txt"]))

    assert exit_code == 1


@patch("apifs.main.setup_logging")
@patch("apifs.main.initialize_adapter")
def test_main_closes_adapter(mock_initialize_adapter, mock_setup_logging, fake_session):
    adapter = ApiAdapter("http://storage.test/api")
    # Swap in the double while keeping the adapter as the session owner
    adapter.session = fake_session
    mock_initialize_adapter.return_value = adapter

    exit_code = main(["has", "a.txt"])

    assert exit_code == 0
    mock_setup_logging.assert_called_once()
    assert fake_session.closed is True
