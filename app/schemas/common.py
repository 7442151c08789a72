from pydantic import BaseModel


def normalize_email(value):
    if value is None:
        return value
    value = value.strip().lower()
    local, _, domain = value.partition("@")
    if not local or not domain:
        raise ValueError("email must be a valid address")
    return value


class MessageResponse(BaseModel):
    message: str
