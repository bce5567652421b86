from shared.utils.app_status_code import AppStatusCode
from shared.core.schemas import JsonOutResult


def error_result(message: str, status_code: str = AppStatusCode.OPERATION_FAILED) -> dict:
    return JsonOutResult(
        data=None,
        status="Failed",
        status_code=status_code,
        message=message
    ).model_dump()
