# LDAP attribute access for LDAPStanding
#
# Directory clients hand us the attributes of one user entry. Values may be
# single or multi-valued, text or raw bytes, and some providers fail lazily
# when a value is read. Everything here degrades to "absent" instead of
# raising.

import re
from typing import Any, Dict, List, Mapping, Optional, Type

from impacket.ldap import ldapasn1 as ldapasn1_impacket

from .exceptions import AttributeParseError
from .utils.logging import debug

# Mapping of attribute name (case-sensitive) to a value or a sequence of values
AttributeBag = Mapping[str, Any]

# =============================================================================
# Attribute names
# =============================================================================

# Active Directory
ATTR_USER_ACCOUNT_CONTROL = "userAccountControl"
ATTR_ACCOUNT_EXPIRES = "accountExpires"
# Windows Server 2003 and later: flags computed from policy
ATTR_USER_ACCOUNT_CONTROL_COMPUTED = "msDS-User-Account-Control-Computed"
# ADAM / AD LDS replacements for the ACCOUNTDISABLE and PASSWORD_EXPIRED flags
ATTR_USER_ACCOUNT_DISABLED = "msDS-UserAccountDisabled"
ATTR_USER_PASSWORD_EXPIRED = "msDS-UserPasswordExpired"

# (Internet Draft) LDAP password policy
ATTR_PWD_ACCOUNT_LOCKED_TIME = "pwdAccountLockedTime"
ATTR_PWD_START_TIME = "pwdStartTime"
ATTR_PWD_END_TIME = "pwdEndTime"
ATTR_PWD_LOCKOUT = "pwdLockout"

# eDirectory
ATTR_LOGIN_DISABLED = "loginDisabled"
ATTR_LOGIN_EXPIRATION_TIME = "loginExpirationTime"
ATTR_LOCKED_BY_INTRUDER = "lockedByIntruder"

# Oracle Internet Directory
ATTR_ORACLE_IS_ENABLED = "orclIsEnabled"

# Everything the status checks read; pass to the directory search
ATTRIBUTE_NAMES = (
    ATTR_USER_ACCOUNT_CONTROL,
    ATTR_USER_ACCOUNT_CONTROL_COMPUTED,
    ATTR_USER_ACCOUNT_DISABLED,
    ATTR_USER_PASSWORD_EXPIRED,
    ATTR_ACCOUNT_EXPIRES,
    ATTR_LOGIN_DISABLED,
    ATTR_ORACLE_IS_ENABLED,
    ATTR_PWD_ACCOUNT_LOCKED_TIME,
    ATTR_PWD_START_TIME,
    ATTR_PWD_END_TIME,
    ATTR_LOGIN_EXPIRATION_TIME,
    ATTR_PWD_LOCKOUT,
    ATTR_LOCKED_BY_INTRUDER,
)


# =============================================================================
# Accessors
# =============================================================================


def get_string_attribute(bag: AttributeBag, name: str) -> Optional[str]:
    """
    Get the first value of an attribute as text.

    Args:
        bag: Attributes of one directory entry
        name: Attribute name (exact case)

    Returns:
        Text of the first value, or None if the attribute is missing, has no
        values, or its value could not be read
    """
    try:
        values = bag.get(name)
        if values is None:
            return None
        if isinstance(values, (str, bytes, bytearray)) or not hasattr(values, "__iter__"):
            first = values
        else:
            first = next(iter(values), None)
            if first is None:
                return None
        if isinstance(first, (bytes, bytearray)):
            return bytes(first).decode("utf-8")
        return str(first)
    except Exception as e:
        debug(f"Could not read attribute {name}: {e}")
        return None


def parse_boolean(value: Optional[str]) -> bool:
    """LDAP boolean text: 'TRUE' in any case is true, anything else (or None) is false."""
    return value is not None and value.lower() == "true"


def attributes_from_entry(entry: Any) -> Dict[str, List[str]]:
    """
    Convert an impacket search result entry into an attribute bag.

    Args:
        entry: Item yielded by LDAPConnection.search()

    Returns:
        Dict of attribute name to list of text values. Search references and
        other non-entry results give an empty dict.
    """
    bag: Dict[str, List[str]] = {}
    if not isinstance(entry, ldapasn1_impacket.SearchResultEntry):
        return bag

    for attr in entry["attributes"]:
        attr_type = str(attr["type"])
        bag[attr_type] = [str(val) for val in attr["vals"]]
    return bag


_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")


def parse_integer(
    attribute: str,
    value: str,
    bits: int,
    error: Type[AttributeParseError] = AttributeParseError,
) -> int:
    """
    Parse attribute text as a signed decimal integer of the given width.

    Only an optional sign and ASCII digits are accepted, no whitespace or
    underscores.

    Raises:
        error: If the value is not a decimal integer or does not fit
    """
    if not _DECIMAL_RE.fullmatch(value):
        raise error(attribute, value, "a decimal integer")
    number = int(value)
    if not -(2 ** (bits - 1)) <= number <= 2 ** (bits - 1) - 1:
        raise error(attribute, value, f"a {bits}-bit integer")
    return number
