import logging

import psutil
import pytest

from sssmon import main as main_module
from sssmon.core.errors import OutputError
from sssmon.core.sample import FIELD_NAMES
from sssmon.main import (
    EXIT_CONFIG_ERROR,
    EXIT_INTERRUPTED,
    EXIT_OK,
    EXIT_RUNTIME_ERROR,
    main,
)

from .conftest import FAKE_DISK


@pytest.fixture
def config_file(tmp_path, proc_root):
    path = tmp_path / 'sss-mon.yaml'
    path.write_text(f"proc_root: {proc_root}\n")
    return str(path)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger('sssmon')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)


def test_field_names(capsys):
    assert main(['--field-names']) == EXIT_OK
    assert capsys.readouterr().out == ' '.join(FIELD_NAMES) + '\n'


def test_help_lists_fields(capsys):
    with pytest.raises(SystemExit) as exc:
        main(['--help'])
    assert exc.value.code == 0
    assert 'network_received' in capsys.readouterr().out


@pytest.mark.parametrize('argv', [
    ['-p', '0'],
    ['-p', 'abc'],
    ['-n', '-1'],
    ['--bogus'],
])
def test_bad_arguments_exit_2(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    assert exc.value.code == 2


def test_unusable_stat_path(tmp_path, config_file):
    assert main(['-c', config_file, '-s', str(tmp_path / 'missing')]) == EXIT_CONFIG_ERROR


def test_log_file_name_too_long(config_file):
    assert main(['-c', config_file, 'x' * 600]) == EXIT_CONFIG_ERROR


def test_runs_iterations_to_stdout(monkeypatch, capsys, tmp_path, config_file):
    monkeypatch.setattr(psutil, 'disk_usage', lambda path: FAKE_DISK)
    monkeypatch.setattr(main_module.CollectionLoop, 'wait_for_next_tick', lambda self: None)
    assert main(['-c', config_file, '-n', '3', '-s', str(tmp_path)]) == EXIT_OK
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3
    assert all(len(line.split()) == len(FIELD_NAMES) for line in lines)
    assert lines[0].split()[1] == '0'


def test_runs_into_log_file(monkeypatch, tmp_path, config_file):
    monkeypatch.setattr(psutil, 'disk_usage', lambda path: FAKE_DISK)
    monkeypatch.setattr(main_module.CollectionLoop, 'wait_for_next_tick', lambda self: None)
    log = tmp_path / 'out.log'
    assert main(['-c', config_file, '-n', '2', str(log)]) == EXIT_OK
    assert len(log.read_text().splitlines()) == 2


def test_unopenable_log_file(monkeypatch, tmp_path, config_file):
    monkeypatch.setattr(psutil, 'disk_usage', lambda path: FAKE_DISK)
    log = tmp_path / 'no-such-dir' / 'out.log'
    assert main(['-c', config_file, '-n', '1', str(log)]) == EXIT_RUNTIME_ERROR


def test_interrupt_closes_log_file(monkeypatch, tmp_path, config_file):
    monkeypatch.setattr(psutil, 'disk_usage', lambda path: FAKE_DISK)
    sinks = []

    def interrupted_run(self):
        sinks.append(self.sink)
        self.tick()
        raise KeyboardInterrupt

    monkeypatch.setattr(main_module.CollectionLoop, 'run', interrupted_run)
    log = tmp_path / 'out.log'
    assert main(['-c', config_file, str(log)]) == EXIT_INTERRUPTED
    assert sinks[0]._handle is None
    assert len(log.read_text().splitlines()) == 1


def test_write_failure_exits_1(monkeypatch, config_file):
    monkeypatch.setattr(psutil, 'disk_usage', lambda path: FAKE_DISK)

    def full_disk(self, sample):
        raise OutputError("could not write to out.log: No space left on device")

    monkeypatch.setattr(main_module.OutputSink, 'write', full_disk)
    assert main(['-c', config_file, '-n', '1']) == EXIT_RUNTIME_ERROR


def test_verbose_applies_before_config_load(monkeypatch, tmp_path, config_file):
    levels = []
    real_setup = main_module.setup_logging

    def recording_setup(level="INFO", console=None):
        levels.append(level)
        return real_setup(level, console)

    monkeypatch.setattr(main_module, 'setup_logging', recording_setup)
    assert main(['-v', '-c', config_file, '-s', str(tmp_path / 'missing')]) == EXIT_CONFIG_ERROR
    assert levels == ['DEBUG']
