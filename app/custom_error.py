from fastapi import HTTPException, status


class ConfigurationMissing(HTTPException):
    def __init__(self, setting_name: str):
        self.setting_name = setting_name
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"{setting_name} is not configured",
        )


class MissingHeaders(HTTPException):
    def __init__(self, missing: list):
        self.missing = missing
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing Svix headers")


class VerificationFailed(HTTPException):
    def __init__(self):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail="Verification error")


class InvalidPayload(HTTPException):
    def __init__(self, error_detail_message: str = "Invalid data structure"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=error_detail_message)


class MissingIdentifier(HTTPException):
    def __init__(self):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail="User ID is missing")


class PersistenceFailure(HTTPException):
    def __init__(self, error_detail_message: str):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=error_detail_message)
