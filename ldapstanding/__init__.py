# LDAPStanding - account status checks for LDAP directory users
#
# Reads the vendor-specific attributes of a user entry and reports whether
# the account is enabled, unexpired, password-current and unlocked.
#
# Supports:
#   - Active Directory (userAccountControl, msDS-User-Account-Control-Computed, accountExpires)
#   - ADAM / AD LDS (msDS-UserAccountDisabled, msDS-UserPasswordExpired)
#   - (Internet Draft) LDAP password policy (pwdAccountLockedTime, pwdStartTime, pwdEndTime, pwdLockout)
#   - eDirectory (loginDisabled, loginExpirationTime, lockedByIntruder)
#   - Oracle Internet Directory (orclIsEnabled)

# Control flags
from .account_control import (
    AccountControl,
    flag_names,
    get_user_account_control,
)

# Attribute access
from .attributes import (
    ATTRIBUTE_NAMES,
    AttributeBag,
    attributes_from_entry,
    get_string_attribute,
)

# Exceptions
from .exceptions import (
    AccountControlParseError,
    AccountExpiresParseError,
    AttributeParseError,
    LDAPStandingError,
    MalformedTimestampError,
)

# Status checks
from .status import (
    AccountStatus,
    are_credentials_not_expired,
    evaluate_account,
    is_enabled,
    is_not_expired,
    is_not_locked,
)

# Time codec
from .utils.date_parser import (
    GeneralizedTime,
    win32_epoch_hundred_nanos,
)

__all__ = [
    # Exceptions
    "LDAPStandingError",
    "AttributeParseError",
    "AccountControlParseError",
    "AccountExpiresParseError",
    "MalformedTimestampError",
    # Attributes
    "ATTRIBUTE_NAMES",
    "AttributeBag",
    "attributes_from_entry",
    "get_string_attribute",
    # Control flags
    "AccountControl",
    "flag_names",
    "get_user_account_control",
    # Time
    "GeneralizedTime",
    "win32_epoch_hundred_nanos",
    # Checks
    "AccountStatus",
    "evaluate_account",
    "is_enabled",
    "is_not_expired",
    "are_credentials_not_expired",
    "is_not_locked",
]
