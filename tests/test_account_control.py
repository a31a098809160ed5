"""
Test suite for userAccountControl resolution.

Tests cover:
- merging userAccountControl with msDS-User-Account-Control-Computed
- strict parsing of control values
- flag helpers
"""

import pytest

from ldapstanding.account_control import (
    AccountControl,
    flag_names,
    get_user_account_control,
    has_flag,
    parse_account_control,
)
from ldapstanding.exceptions import AccountControlParseError, AttributeParseError


class TestGetUserAccountControl:
    def test_neither_present(self):
        assert get_user_account_control({}) is None

    def test_only_raw(self):
        assert get_user_account_control({"userAccountControl": ["512"]}) == 512

    def test_only_computed(self):
        assert get_user_account_control({"msDS-User-Account-Control-Computed": ["16"]}) == 16

    def test_both_merged_with_or(self):
        bag = {"userAccountControl": ["1"], "msDS-User-Account-Control-Computed": ["2"]}
        assert get_user_account_control(bag) == 3

    def test_merge_activates_bit_neither_set_alone(self):
        """DONT_EXPIRE_PASSWORD | LOCKOUT only appears together after the merge."""
        bag = {
            "userAccountControl": [str(int(AccountControl.NORMAL_ACCOUNT | AccountControl.DONT_EXPIRE_PASSWORD))],
            "msDS-User-Account-Control-Computed": [str(int(AccountControl.LOCKOUT))],
        }
        uac = get_user_account_control(bag)
        assert has_flag(uac, AccountControl.LOCKOUT)
        assert has_flag(uac, AccountControl.DONT_EXPIRE_PASSWORD)
        assert has_flag(uac, AccountControl.DONT_EXPIRE_PASSWORD | AccountControl.LOCKOUT)

    def test_empty_attribute_is_absent(self):
        assert get_user_account_control({"userAccountControl": []}) is None

    def test_non_numeric_raw_raises(self):
        with pytest.raises(AccountControlParseError) as exc_info:
            get_user_account_control({"userAccountControl": ["NORMAL"]})
        assert exc_info.value.attribute == "userAccountControl"
        assert exc_info.value.value == "NORMAL"

    def test_non_numeric_computed_raises_even_with_valid_raw(self):
        bag = {"userAccountControl": ["512"], "msDS-User-Account-Control-Computed": ["0x10"]}
        with pytest.raises(AccountControlParseError) as exc_info:
            get_user_account_control(bag)
        assert exc_info.value.attribute == "msDS-User-Account-Control-Computed"


class TestParseAccountControl:
    def test_decimal(self):
        assert parse_account_control("userAccountControl", "66048") == 66048

    def test_signed(self):
        assert parse_account_control("userAccountControl", "-1") == -1
        assert parse_account_control("userAccountControl", "+2") == 2

    def test_int32_bounds(self):
        assert parse_account_control("userAccountControl", "2147483647") == 2147483647
        assert parse_account_control("userAccountControl", "-2147483648") == -2147483648

    @pytest.mark.parametrize("value", ["2147483648", "-2147483649", "", " 512", "512 ", "5_12", "1e3", "0x200"])
    def test_rejected(self, value):
        with pytest.raises(AccountControlParseError):
            parse_account_control("userAccountControl", value)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_account_control("userAccountControl", "abc")
        with pytest.raises(AttributeParseError):
            parse_account_control("userAccountControl", "abc")


class TestFlagHelpers:
    def test_flag_values(self):
        assert AccountControl.ACCOUNTDISABLE == 0x0002
        assert AccountControl.LOCKOUT == 0x0010
        assert AccountControl.DONT_EXPIRE_PASSWORD == 0x10000
        assert AccountControl.PASSWORD_EXPIRED == 0x800000

    def test_flag_names(self):
        assert flag_names(0x10200) == ["NORMAL_ACCOUNT", "DONT_EXPIRE_PASSWORD"]
        assert flag_names(514) == ["ACCOUNTDISABLE", "NORMAL_ACCOUNT"]
        assert flag_names(0) == []

    def test_has_flag_none(self):
        assert not has_flag(None, AccountControl.LOCKOUT)

    def test_has_flag(self):
        assert has_flag(514, AccountControl.ACCOUNTDISABLE)
        assert not has_flag(512, AccountControl.ACCOUNTDISABLE)
