import logging

from icefish.water_column.utils import safe_log_exception


def test_safe_log_exception_context(caplog):
    with caplog.at_level(logging.ERROR, logger='icefish.water_column.utils'):
        safe_log_exception('static pass failed', RuntimeError('boom'), width=800, height=600)
    assert 'static pass failed' in caplog.text
    assert 'width=800' in caplog.text
    assert caplog.records[0].exc_info is not None


def test_safe_log_exception_fallback(monkeypatch, capsys):
    # Force logger.error to raise to exercise the stderr fallback
    def bad_error(*args, **kwargs):
        raise OSError('stream closed')

    logger = logging.getLogger('icefish.water_column.utils')
    monkeypatch.setattr(logger, 'error', bad_error)
    safe_log_exception('msg', RuntimeError('test'))
    assert 'LOGGING FAILURE: msg test' in capsys.readouterr().err
