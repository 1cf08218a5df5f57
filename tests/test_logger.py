from rtoping import logger as logger_module
from rtoping.logger import Logger


def test_info_and_vprint(capsys):
    log = Logger()
    log.info("normal")
    log.vprint("detail")
    assert capsys.readouterr().out == "normal\n"

    log.set_verbose(True)
    log.vprint("detail")
    assert capsys.readouterr().out == "detail\n"


def test_quiet_silences_everything_but_errors(capsys):
    log = Logger(verbose=True, quiet=True)
    log.info("normal")
    log.vprint("detail")
    log.error("fatal")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == "fatal\n"


def test_defaults_from_environment(monkeypatch):
    monkeypatch.setenv("RTOPING_VERBOSE", "yes")
    monkeypatch.setenv("RTOPING_QUIET", "0")
    assert logger_module._detect_default_verbose() is True
    assert logger_module._detect_default_quiet() is False


def test_defaults_from_argv(monkeypatch):
    monkeypatch.delenv("RTOPING_VERBOSE", raising=False)
    monkeypatch.delenv("RTOPING_QUIET", raising=False)
    monkeypatch.setattr("sys.argv", ["rto-ping.py", "-q"])
    assert logger_module._detect_default_verbose() is False
    assert logger_module._detect_default_quiet() is True
