# userAccountControl flags and resolution
#
# Flag values follow the ADS_USER_FLAG_ENUM names in Iads.h.
# https://docs.microsoft.com/en-us/windows/win32/adschema/a-useraccountcontrol

from enum import IntFlag
from typing import List, Optional

from .attributes import (
    ATTR_USER_ACCOUNT_CONTROL,
    ATTR_USER_ACCOUNT_CONTROL_COMPUTED,
    AttributeBag,
    get_string_attribute,
    parse_integer,
)
from .exceptions import AccountControlParseError


class AccountControl(IntFlag):
    """Active Directory user account control bits."""

    SCRIPT = 0x0001
    ACCOUNTDISABLE = 0x0002
    HOMEDIR_REQUIRED = 0x0008
    LOCKOUT = 0x0010
    PASSWD_NOTREQD = 0x0020
    PASSWD_CANT_CHANGE = 0x0040
    ENCRYPTED_TEXT_PASSWORD_ALLOWED = 0x0080
    TEMP_DUPLICATE_ACCOUNT = 0x0100
    NORMAL_ACCOUNT = 0x0200
    INTERDOMAIN_TRUST_ACCOUNT = 0x0800
    WORKSTATION_TRUST_ACCOUNT = 0x1000
    SERVER_TRUST_ACCOUNT = 0x2000
    DONT_EXPIRE_PASSWORD = 0x1_0000
    MNS_LOGON_ACCOUNT = 0x2_0000
    SMARTCARD_REQUIRED = 0x4_0000
    TRUSTED_FOR_DELEGATION = 0x8_0000
    NOT_DELEGATED = 0x10_0000
    USE_DES_KEY_ONLY = 0x20_0000
    DONT_REQUIRE_PREAUTH = 0x40_0000
    PASSWORD_EXPIRED = 0x80_0000
    TRUSTED_TO_AUTHENTICATE_FOR_DELEGATION = 0x100_0000
    PARTIAL_SECRETS_ACCOUNT = 0x400_0000


def flag_names(value: int) -> List[str]:
    """
    Names of the known flags set in a control value.

    >>> flag_names(0x10200)
    ['NORMAL_ACCOUNT', 'DONT_EXPIRE_PASSWORD']
    """
    return [flag.name for flag in AccountControl if value & flag.value]


def has_flag(value: Optional[int], flag: AccountControl) -> bool:
    """True if value is present and every bit of flag is set in it."""
    return value is not None and (value & flag) == flag


def parse_account_control(attribute: str, value: str) -> int:
    """
    Parse a control attribute as a signed 32-bit decimal integer.

    Raises:
        AccountControlParseError: If the value is not a decimal integer or
            does not fit in 32 bits
    """
    return parse_integer(attribute, value, 32, AccountControlParseError)


def get_user_account_control(bag: AttributeBag) -> Optional[int]:
    """
    Effective user account control value of an entry.

    Merges userAccountControl with msDS-User-Account-Control-Computed, which
    some servers use to expose flags (lockout, password expiry) derived from
    policy rather than stored. A flag counts as set if either attribute sets it.

    Returns:
        The merged value, or None if neither attribute is present

    Raises:
        AccountControlParseError: If a present attribute is not an integer.
            Unlike other attributes a corrupt control value is never
            treated as absent.
    """
    uac = get_string_attribute(bag, ATTR_USER_ACCOUNT_CONTROL)
    computed_uac = get_string_attribute(bag, ATTR_USER_ACCOUNT_CONTROL_COMPUTED)
    if uac is None:
        if computed_uac is None:
            return None
        return parse_account_control(ATTR_USER_ACCOUNT_CONTROL_COMPUTED, computed_uac)
    elif computed_uac is None:
        return parse_account_control(ATTR_USER_ACCOUNT_CONTROL, uac)
    return parse_account_control(ATTR_USER_ACCOUNT_CONTROL, uac) | parse_account_control(
        ATTR_USER_ACCOUNT_CONTROL_COMPUTED, computed_uac
    )
