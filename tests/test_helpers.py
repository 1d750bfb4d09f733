import io
import json
import logging

from remindbridge import helpers


class TestHelpers:

    def test_get_uuid(self):
        uuid = helpers.get_uuid()
        assert len(uuid) == 36
        assert uuid == uuid.upper()

    def test_is_int(self):
        assert helpers.is_int(0) is True
        assert helpers.is_int(-3) is True
        assert helpers.is_int(True) is False
        assert helpers.is_int(1.0) is False
        assert helpers.is_int("1") is False
        assert helpers.is_int(None) is False

    def test_to_json(self):
        success, data = helpers.to_json({'title': 'Home', 'id': 'L1'}, 'list')
        assert success is True
        assert json.loads(data) == {'title': 'Home', 'id': 'L1'}

        success, data = helpers.to_json({'title': {1, 2}}, 'list')
        assert success is False
        assert data.startswith('Unable to encode list')

        success, data = helpers.to_json({'value': float('nan')}, 'value')
        assert success is False

    def test_settings_folder(self, tmp_path, monkeypatch):
        folder = tmp_path / "RemindBridge"
        monkeypatch.setattr(helpers, 'DATA_LOCATION', folder)
        assert helpers.settings_folder() == folder
        assert folder.is_dir()

    def test_setup_logging(self, tmp_path):
        root = logging.getLogger()
        before = list(root.handlers)
        logger = helpers.setup_logging('debug', tmp_path, log_stream=io.StringIO())
        try:
            assert logger is root
            assert logger.level == logging.DEBUG
            logging.debug('Log file test')
            log_files = list(tmp_path.glob('RemindBridge_*.log'))
            assert len(log_files) == 1
        finally:
            for handler in list(root.handlers):
                if handler not in before:
                    handler.close()
                    root.removeHandler(handler)
        assert 'Log file test' in log_files[0].read_text()

    def test_function_handler(self):
        messages = []
        handler = helpers.FunctionHandler(messages.append)
        handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        logger = logging.getLogger('remindbridge.test')
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        try:
            logger.info('Hello')
        finally:
            logger.removeHandler(handler)
        assert messages == ['INFO: Hello']
