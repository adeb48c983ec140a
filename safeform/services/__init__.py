from safeform.services.protocols import OtpGateway, ContactDirectory, OtpResult, FoundUser
from safeform.services.mock import MockOtpGateway, MockContactDirectory

__all__ = [
    "OtpGateway",
    "ContactDirectory",
    "OtpResult",
    "FoundUser",
    "MockOtpGateway",
    "MockContactDirectory",
]
