import importlib
import logging

from medplanner import config


def test_import_leaves_logging_alone(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    importlib.reload(config)

    assert calls == []

def test_setup_logging_sets_package_level(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    logger = logging.getLogger("medplanner")
    monkeypatch.setattr(logger, "level", logger.level)

    config.setup_logging("debug")

    assert len(calls) == 1
    assert logger.level == logging.DEBUG
