from typing import Dict

from fastapi import status

from src.libs.result import Error


class ClientError(Exception):
    """Expected failure the caller can act on; its message is returned as is"""

    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    """
    Failure on our side. The client only sees the error message when the use
    case marked it public (e.g. email dispatch); details stay in the log.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)

    @property
    def public_message(self) -> str:
        if self.base_error.public:
            return self.base_error.message
        return "Internal server error"


ADMIN_ERROR_STATUS = {
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "CANNOT_MODIFY_SELF": status.HTTP_400_BAD_REQUEST,
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
}


def raise_for_error(error: Error, status_by_code: Dict[str, int]):
    """ClientError for the codes listed in status_by_code, ServerError otherwise"""
    status_code = status_by_code.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
