import logging
from pathlib import Path

import pytest

from schemer import config
from schemer.interpreter import Interpreter


def test_default_prelude_root_is_bundled():
    root = config.get_prelude_root()
    assert (root / "derived.scm").exists()


def test_prelude_root_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("SCHEMER_PRELUDE_PATH", str(tmp_path))
    assert config.get_prelude_root() == tmp_path


def test_prelude_path_may_name_a_file(monkeypatch, tmp_path):
    target = tmp_path / "derived.scm"
    target.write_text("", encoding="utf-8")
    monkeypatch.setenv("SCHEMER_PRELUDE_PATH", str(target))
    assert config.get_prelude_root() == tmp_path


def test_custom_prelude_is_loaded(monkeypatch, tmp_path):
    (tmp_path / "derived.scm").write_text(
        "(define-syntax unless (syntax-rules () ((_ c e) (if c #f e))))", encoding="utf-8"
    )
    monkeypatch.setenv("SCHEMER_PRELUDE_PATH", str(tmp_path))
    itp = Interpreter()
    assert itp.eval("(unless #f 3)") == 3
    assert not itp.macros.is_macro(itp.eval("'and"))


def test_missing_prelude(monkeypatch, tmp_path):
    monkeypatch.setenv("SCHEMER_PRELUDE_PATH", str(tmp_path))
    with pytest.raises(FileNotFoundError):
        Interpreter()


@pytest.mark.parametrize("raw, expected", [(None, 10000), ("250", 250)])
def test_max_expansion_steps(monkeypatch, raw, expected):
    if raw is None:
        monkeypatch.delenv("SCHEMER_MAX_EXPANSION_STEPS", raising=False)
    else:
        monkeypatch.setenv("SCHEMER_MAX_EXPANSION_STEPS", raw)
    assert config.get_max_expansion_steps() == expected


@pytest.mark.parametrize("raw", ["many", "0", "-3"])
def test_invalid_max_expansion_steps(monkeypatch, raw):
    monkeypatch.setenv("SCHEMER_MAX_EXPANSION_STEPS", raw)
    with pytest.raises(ValueError):
        config.get_max_expansion_steps()


def test_log_level_from_environment(monkeypatch):
    logger = logging.getLogger("schemer")
    previous = logger.level
    monkeypatch.setenv("SCHEMER_LOG_LEVEL", "debug")
    try:
        config.configure_logging()
        assert logger.level == logging.DEBUG
    finally:
        logger.setLevel(previous)


def test_expansion_is_logged(itp, caplog):
    with caplog.at_level(logging.DEBUG, logger="schemer"):
        itp.eval("(and 1 2)")
    assert any("and: rule" in r.getMessage() for r in caplog.records)


def test_paths_from_env_splits_on_separator(monkeypatch):
    monkeypatch.setenv("SCHEMER_TEST_PATHS", f"a{config._sep()} b {config._sep()}")
    assert config.paths_from_env("SCHEMER_TEST_PATHS", []) == [Path("a"), Path("b")]
