from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class PasswordEncoder:
    """bcrypt password encoding for stored user credentials"""

    def __init__(self, context: CryptContext = pwd_context):
        self.context = context

    def encode(self, raw_password: str) -> str:
        return self.context.hash(raw_password)

    def matches(self, raw_password: str, encoded_password: str) -> bool:
        return self.context.verify(raw_password, encoded_password)
