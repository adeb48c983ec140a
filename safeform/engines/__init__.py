from safeform.engines.form import ValidatedForm, FieldProps, SubmitStatus

__all__ = [
    "ValidatedForm",
    "FieldProps",
    "SubmitStatus",
]
