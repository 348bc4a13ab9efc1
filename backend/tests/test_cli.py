import pytest
from sqlalchemy import inspect

from userbase.__main__ import main
from userbase.database import create_store_engine


@pytest.fixture
def database_url(tmp_path, monkeypatch) -> str:
    url = f"sqlite:///{tmp_path / 'cli.db'}"
    monkeypatch.setattr("userbase.config.settings.database_url", url)
    return url


def test_migrate_seed_rollback(database_url, capsys):
    assert main(["migrate"]) == 0
    assert "Applied 20230217193940" in capsys.readouterr().out

    assert main(["migrate"]) == 0
    assert "Already up to date" in capsys.readouterr().out

    assert main(["seed"]) == 0
    assert "Seeded 3 users" in capsys.readouterr().out

    assert main(["rollback"]) == 0
    assert "Reverted 20230217193940" in capsys.readouterr().out

    engine = create_store_engine(database_url)
    assert not inspect(engine).has_table("users")
    engine.dispose()


def test_seed_without_schema_fails(database_url, capsys):
    assert main(["seed"]) == 1
    assert "Could not seed users" in capsys.readouterr().err


def test_requires_command():
    with pytest.raises(SystemExit):
        main([])


def test_serve_passes_explicit_port(monkeypatch):
    calls = []
    monkeypatch.setattr("uvicorn.run", lambda app, **kwargs: calls.append(kwargs))

    assert main(["serve", "--host", "127.0.0.1", "--port", "0"]) == 0
    assert calls[0]["host"] == "127.0.0.1"
    assert calls[0]["port"] == 0


def test_serve_defaults_to_settings(monkeypatch):
    calls = []
    monkeypatch.setattr("uvicorn.run", lambda app, **kwargs: calls.append(kwargs))
    monkeypatch.setattr("userbase.config.settings.port", 5501)

    assert main(["serve"]) == 0
    assert calls[0]["port"] == 5501
