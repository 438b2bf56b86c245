import os

from utils.env_loader import load_environments


def test_missing_file_is_ignored(tmp_path):
    assert load_environments(str(tmp_path / "absent.env")) == {}


def test_loads_pairs_without_overriding_process_env(monkeypatch, tmp_path):
    monkeypatch.setenv("SQLCONSOLE_KEEP", "from-process")
    monkeypatch.delenv("SQLCONSOLE_QUOTED", raising=False)
    monkeypatch.delenv("SQLCONSOLE_EXPORTED", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text(
        "\n".join(
            [
                "# comment",
                "SQLCONSOLE_KEEP=from-file",
                "SQLCONSOLE_QUOTED=\"mysql://u:p=q@h/db\"",
                "export SQLCONSOLE_EXPORTED=yes",
                "not a pair",
            ]
        ),
        encoding="utf-8",
    )
    try:
        applied = load_environments(str(env_file))
        assert applied == {"SQLCONSOLE_QUOTED": "mysql://u:p=q@h/db", "SQLCONSOLE_EXPORTED": "yes"}
        assert os.environ["SQLCONSOLE_KEEP"] == "from-process"
    finally:
        os.environ.pop("SQLCONSOLE_QUOTED", None)
        os.environ.pop("SQLCONSOLE_EXPORTED", None)
