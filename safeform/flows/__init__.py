from safeform.flows.auth import AuthFlow, AuthStage
from safeform.flows.trustees import AddTrusteeFlow, NewTrustee, TrusteeMode

__all__ = [
    "AuthFlow",
    "AuthStage",
    "AddTrusteeFlow",
    "NewTrustee",
    "TrusteeMode",
]
