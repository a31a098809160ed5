# Account status checks
#
# Each check walks the vendor conventions in a fixed order and the first
# attribute that applies decides. No attribute at all means the account is in
# good standing for that facet. The checks only report facts; whether an
# expired password should block a login is up to the caller.

from dataclasses import dataclass
from typing import List, Optional

from .account_control import AccountControl, flag_names, get_user_account_control, has_flag
from .attributes import (
    ATTR_ACCOUNT_EXPIRES,
    ATTR_LOCKED_BY_INTRUDER,
    ATTR_LOGIN_DISABLED,
    ATTR_LOGIN_EXPIRATION_TIME,
    ATTR_ORACLE_IS_ENABLED,
    ATTR_PWD_ACCOUNT_LOCKED_TIME,
    ATTR_PWD_END_TIME,
    ATTR_PWD_LOCKOUT,
    ATTR_PWD_START_TIME,
    ATTR_USER_ACCOUNT_DISABLED,
    ATTR_USER_PASSWORD_EXPIRED,
    AttributeBag,
    get_string_attribute,
    parse_boolean,
    parse_integer,
)
from .exceptions import AccountExpiresParseError, MalformedTimestampError
from .utils.date_parser import (
    ACCOUNT_NO_EXPIRATION,
    GeneralizedTime,
    parse_ad_timestamp,
    win32_epoch_hundred_nanos,
)
from .utils.logging import debug, info, is_debug_enabled, warn

# pwdAccountLockedTime value for an administratively disabled account; any
# other generalized time means locked as of that time
ACCOUNT_DISABLED = "000001010000Z"


# =============================================================================
# Facet checks
# =============================================================================


# https://ldapwiki.com/wiki/Administratively%20Disabled
def is_enabled(user: AttributeBag) -> bool:
    """
    Check whether the account is enabled.

    Order: AD ACCOUNTDISABLE flag, ADAM msDS-UserAccountDisabled, password
    policy pwdAccountLockedTime sentinel, eDirectory loginDisabled, Oracle
    orclIsEnabled. Enabled if none of them is present.

    Raises:
        AccountControlParseError: If a control attribute is not an integer
    """
    # Active Directory attributes
    uac = get_user_account_control(user)
    if has_flag(uac, AccountControl.ACCOUNTDISABLE):
        debug("userAccountControl has ACCOUNTDISABLE set")
        return False
    account_disabled = get_string_attribute(user, ATTR_USER_ACCOUNT_DISABLED)
    if account_disabled is not None:
        return not parse_boolean(account_disabled)
    # (Internet Draft) LDAP password policy attributes
    if get_string_attribute(user, ATTR_PWD_ACCOUNT_LOCKED_TIME) == ACCOUNT_DISABLED:
        debug(f"{ATTR_PWD_ACCOUNT_LOCKED_TIME} marks the account as disabled")
        return False
    # eDirectory attributes
    login_disabled = get_string_attribute(user, ATTR_LOGIN_DISABLED)
    if login_disabled is not None:
        return not parse_boolean(login_disabled)
    # Oracle attributes
    oracle_is_enabled = get_string_attribute(user, ATTR_ORACLE_IS_ENABLED)
    return oracle_is_enabled is None or oracle_is_enabled.lower() == "enabled"


# https://ldapwiki.com/wiki/Account%20Expiration
def is_not_expired(user: AttributeBag) -> bool:
    """
    Check whether the account is within its validity period.

    Order: AD accountExpires, then password policy pwdStartTime (a start in
    the future counts as expired) and pwdEndTime, then eDirectory
    loginExpirationTime.

    Raises:
        AccountExpiresParseError: If accountExpires is not a 64-bit integer
    """
    # Active Directory attributes
    account_expires = get_string_attribute(user, ATTR_ACCOUNT_EXPIRES)
    if account_expires is not None:
        expires = parse_integer(ATTR_ACCOUNT_EXPIRES, account_expires, 64, AccountExpiresParseError)
        if expires == 0 or expires == ACCOUNT_NO_EXPIRATION:
            return True
        if is_debug_enabled():
            debug(f"{ATTR_ACCOUNT_EXPIRES} {expires} ({parse_ad_timestamp(expires)})")
        return expires > win32_epoch_hundred_nanos()

    # (Internet Draft) LDAP password policy attributes
    now = GeneralizedTime.now()
    start_time = get_generalized_time_attribute(user, ATTR_PWD_START_TIME)
    if start_time is not None and start_time.is_after(now):
        debug(f"{ATTR_PWD_START_TIME} {start_time} is in the future")
        return False
    end_time = get_generalized_time_attribute(user, ATTR_PWD_END_TIME)
    if end_time is not None:
        return end_time.is_after(now)

    # eDirectory attributes
    login_expiration_time = get_generalized_time_attribute(user, ATTR_LOGIN_EXPIRATION_TIME)
    return login_expiration_time is None or login_expiration_time.is_after(now)


# https://ldapwiki.com/wiki/Password%20Expiration
def are_credentials_not_expired(user: AttributeBag) -> bool:
    """
    Check whether the password is still valid.

    DONT_EXPIRE_PASSWORD wins over PASSWORD_EXPIRED when both are set. Without
    a control value the ADAM msDS-UserPasswordExpired attribute decides.

    Raises:
        AccountControlParseError: If a control attribute is not an integer
    """
    # Active Directory attributes
    uac = get_user_account_control(user)
    if uac is not None:
        if has_flag(uac, AccountControl.DONT_EXPIRE_PASSWORD):
            return True
        if has_flag(uac, AccountControl.PASSWORD_EXPIRED):
            return False
    password_expired = get_string_attribute(user, ATTR_USER_PASSWORD_EXPIRED)
    return not parse_boolean(password_expired)


# https://ldapwiki.com/wiki/Account%20Lockout
# https://ldapwiki.com/wiki/Intruder%20Detection
def is_not_locked(user: AttributeBag) -> bool:
    """
    Check whether the account is free of lockout.

    Order: AD LOCKOUT flag, standard pwdLockout, eDirectory lockedByIntruder.

    Raises:
        AccountControlParseError: If a control attribute is not an integer
    """
    # Active Directory attributes
    uac = get_user_account_control(user)
    if has_flag(uac, AccountControl.LOCKOUT):
        return False
    # standard attributes
    lockout = get_string_attribute(user, ATTR_PWD_LOCKOUT)
    if lockout is not None:
        return not parse_boolean(lockout)
    # eDirectory attribute
    locked_by_intruder = get_string_attribute(user, ATTR_LOCKED_BY_INTRUDER)
    return not parse_boolean(locked_by_intruder)


# =============================================================================
# Helpers
# =============================================================================


def get_generalized_time_attribute(user: AttributeBag, name: str) -> Optional[GeneralizedTime]:
    """
    Read an attribute as generalized time.

    A malformed value is logged as a warning and treated as absent.
    """
    timestamp = get_string_attribute(user, name)
    if timestamp is None:
        return None
    try:
        return GeneralizedTime.parse(timestamp)
    except MalformedTimestampError as e:
        warn(f"Invalid format found parsing generalized time attribute {name} with value '{timestamp}': {e.reason}")
        return None


# =============================================================================
# Combined status
# =============================================================================


@dataclass(frozen=True)
class AccountStatus:
    """The four account facets of one directory entry."""

    enabled: bool = True
    account_non_expired: bool = True
    credentials_non_expired: bool = True
    account_non_locked: bool = True

    @property
    def in_good_standing(self) -> bool:
        """True if no facet reports a problem."""
        return not self.problems()

    def problems(self) -> List[str]:
        """Readable names of the failing facets, in check order."""
        facets = [
            (self.enabled, "disabled"),
            (self.account_non_expired, "account expired"),
            (self.credentials_non_expired, "credentials expired"),
            (self.account_non_locked, "locked"),
        ]
        return [name for ok, name in facets if not ok]


def evaluate_account(user: AttributeBag, name: Optional[str] = None) -> AccountStatus:
    """
    Run all four checks on one entry.

    Args:
        user: Attributes of the directory entry
        name: Account name used in log messages (optional)

    Returns:
        AccountStatus with one boolean per facet

    Raises:
        AccountControlParseError: If a control attribute is not an integer
        AccountExpiresParseError: If accountExpires is not an integer
    """
    uac = get_user_account_control(user)
    if uac is not None and is_debug_enabled():
        debug(f"Effective userAccountControl {uac:#x}: {', '.join(flag_names(uac)) or 'no flags'}")

    status = AccountStatus(
        enabled=is_enabled(user),
        account_non_expired=is_not_expired(user),
        credentials_non_expired=are_credentials_not_expired(user),
        account_non_locked=is_not_locked(user),
    )
    if not status.in_good_standing:
        info(f"{name or 'Account'}: {', '.join(status.problems())}")
    return status
