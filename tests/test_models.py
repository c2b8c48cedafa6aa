"""Tests for error codes, outcomes and the debug filter."""

import dataclasses

import pytest
from unittest.mock import MagicMock, patch

from hue_rest.core.debug import MSG_DEBUG, MSG_ERR, MSG_INFO, MSG_OFF, Debugger, click_sink
from hue_rest.models.errors import BridgeErrorCode
from hue_rest.models.outcome import BridgeError, Success, TransportFailure
from hue_rest.models.types import EntertainmentArea


class TestBridgeErrorCode:

    @pytest.mark.parametrize('member, value', [
        ('UNAUTHORIZED', 1), ('INVALID_MESSAGE', 2), ('RESOURCE_UNAVAILABLE', 3),
        ('METHOD_NOT_ALLOWED', 4), ('MISSING_PARAMETERS', 5), ('PARAMETER_UNAVAILABLE', 6),
        ('INVALID_VALUE', 7), ('NOT_MODIFIABLE', 8), ('TOO_MANY', 11), ('PORTAL_REQUIRED', 12),
        ('INTERNAL_ERROR', 901), ('LINK_BUTTON_NOT_PUSHED', 101), ('DHCP_NOT_DISABLED', 110),
        ('INVALID_UPDATE_STATE', 111), ('PARAMETER_NOT_MODIFIABLE', 201),
        ('COMMISSIONABLE_LIST_FULL', 203), ('GROUP_TABLE_FULL', 301), ('DELETE_NOT_PERMITTED', 305),
        ('ALREADY_USED', 306), ('SCENE_BUFFER_FULL', 402), ('SCENE_LOCKED', 403), ('GROUP_EMPTY', 404),
        ('CANNOT_CREATE_SENSOR', 501), ('SENSOR_LIST_FULL', 502),
        ('COMMISSIONABLE_SENSOR_LIST_FULL', 503), ('RULE_ENGINE_FULL', 601), ('CONDITION_ERROR', 607),
        ('ACTION_ERROR', 608), ('UNABLE_TO_ACTIVATE', 609), ('SCHEDULE_LIST_FULL', 701),
        ('INVALID_TIMEZONE', 702), ('CANNOT_SET_SCHEDULE_TIME', 703), ('CANNOT_CREATE_SCHEDULE', 704),
        ('SCHEDULE_IN_PAST', 705), ('COMMAND_ERROR', 706), ('MODEL_INVALID', 801),
        ('FACTORY_NEW', 802), ('INVALID_STATE', 803),
    ])
    def test_wire_values(self, member, value):
        assert BridgeErrorCode[member] == value

    def test_no_extra_codes(self):
        assert len(BridgeErrorCode) == 38


class TestOutcome:

    def test_status_convention(self):
        assert Success({}).status == 0
        assert BridgeError(101).status == 101
        assert TransportFailure('refused').status < 0

    def test_ok(self):
        assert Success().ok
        assert not BridgeError(1).ok
        assert not TransportFailure().ok

    def test_unknown_code_kept(self):
        error = BridgeError(9, 'undocumented')
        assert error.status == 9
        assert error.kind is None

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            Success().payload = 1
        with pytest.raises(dataclasses.FrozenInstanceError):
            EntertainmentArea(1, 'TV').name = 'x'


class TestDebugger:

    def test_level_filter(self):
        sink = MagicMock()
        debugger = Debugger(sink, MSG_INFO)

        debugger.error('e')
        debugger.info('i')
        debugger.debug('d')

        assert [c.args for c in sink.call_args_list] == [(MSG_ERR, 'e'), (MSG_INFO, 'i')]

    def test_off_emits_nothing(self):
        sink = MagicMock()
        debugger = Debugger(sink, MSG_OFF)
        debugger.error('e')
        debugger.log(MSG_OFF, 'never')
        sink.assert_not_called()

    def test_default_sink(self):
        assert Debugger().sink is click_sink

    @patch('hue_rest.core.debug.click')
    def test_click_sink_errors_to_stderr(self, mock_click):
        click_sink(MSG_ERR, 'boom')
        mock_click.secho.assert_called_once_with('hue_rest: boom', fg='red', err=True)

    @patch('hue_rest.core.debug.click')
    def test_click_sink_info_to_stdout(self, mock_click):
        click_sink(MSG_INFO, 'hello')
        mock_click.echo.assert_called_once_with('hue_rest: hello')

    @patch('hue_rest.core.debug.click')
    def test_click_sink_debug_dimmed(self, mock_click):
        click_sink(MSG_DEBUG, 'detail')
        mock_click.secho.assert_called_once_with('hue_rest: detail', dim=True)
