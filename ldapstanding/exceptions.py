# LDAPStanding Exceptions

# =============================================================================
# Exceptions
# =============================================================================


class LDAPStandingError(Exception):
    """Base exception for account status evaluation"""

    pass


class MalformedTimestampError(LDAPStandingError, ValueError):
    """Value is not a valid LDAP generalized time"""

    def __init__(self, value: str, reason: str = "unrecognized format"):
        self.value = value
        self.reason = reason
        super().__init__(f"Malformed generalized time '{value}': {reason}")


class AttributeParseError(LDAPStandingError, ValueError):
    """Attribute is present but its value cannot be interpreted"""

    def __init__(self, attribute: str, value: str, expected: str):
        self.attribute = attribute
        self.value = value
        self.expected = expected
        super().__init__(f"Attribute {attribute} has value '{value}', expected {expected}")


class AccountControlParseError(AttributeParseError):
    """userAccountControl (or its computed variant) is not a 32-bit integer"""

    pass


class AccountExpiresParseError(AttributeParseError):
    """accountExpires is not a 64-bit integer"""

    pass
