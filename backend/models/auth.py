"""
Prospection - Modeles Auth
OTP par téléphone (vendeurs) + clé API partagée (admin).
"""

from pydantic import BaseModel, field_validator

from config import normalize_phone


def _check_phone(v: str) -> str:
    is_valid, result = normalize_phone(v)
    if not is_valid:
        raise ValueError(result)
    return result


class OtpRequest(BaseModel):
    phone: str

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        return _check_phone(v)


class OtpVerify(BaseModel):
    phone: str
    code: str

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        return _check_phone(v)

    @field_validator("code")
    @classmethod
    def strip_code(cls, v):
        return v.strip()


class AdminLogin(BaseModel):
    apiKey: str


class TokenResponse(BaseModel):
    token: str
