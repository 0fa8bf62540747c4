from unittest.mock import MagicMock

import pytest

from utils.service_base import BaseService, ErrorCodes, service_err, service_ok, status_for


class CountingService(BaseService):
    @BaseService.log_performance
    def succeed(self):
        return service_ok(3)

    @BaseService.log_performance
    def explode(self):
        raise RuntimeError("boom")


@pytest.mark.unit
class TestServiceResult:
    def test_err_defaults_detail_to_code(self):
        result = service_err(ErrorCodes.CONFLICT)

        assert result.ok is False
        assert result.error_detail == "conflict"

    @pytest.mark.parametrize(
        "code,status",
        [
            (ErrorCodes.LISTING_NOT_FOUND, 404),
            (ErrorCodes.CONVERSATION_NOT_FOUND, 404),
            (ErrorCodes.PERMISSION_DENIED, 403),
            (ErrorCodes.INVALID_STATE, 400),
            (ErrorCodes.DUPLICATE_REVIEW, 400),
            (ErrorCodes.PAID_PLAN_REQUIRES_CHECKOUT, 400),
            (ErrorCodes.CONFLICT, 409),
            (ErrorCodes.INTERNAL_ERROR, 500),
            ("something_else", 500),
        ],
    )
    def test_status_for(self, code, status):
        assert status_for(code) == status


@pytest.mark.unit
class TestBaseService:
    def test_log_performance_passes_result_through(self):
        assert CountingService().succeed().value == 3

    def test_log_performance_reraises(self):
        service = CountingService()
        service.logger = MagicMock()

        with pytest.raises(RuntimeError):
            service.explode()
        service.logger.error.assert_called_once()

    def test_wrap_exception(self):
        service = CountingService()

        assert service.wrap_exception(lambda: 1 / 0).error == ErrorCodes.INTERNAL_ERROR
        assert service.wrap_exception(lambda: "fine").value == "fine"
