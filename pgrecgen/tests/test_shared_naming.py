import pytest

from pgrecgen.shared.naming import (
    PYTHON_KEYWORDS,
    is_valid_identifier,
    record_name,
    sanitize_field_name,
    sanitize_module_name,
    unique_name,
)


class TestRecordName:
    @pytest.mark.parametrize(
        "table_name,expected",
        [
            ("user_accounts", "DbUserAccountsRec"),
            ("orders", "DbOrdersRec"),
            ("", "DbRec"),
            ("_", "DbRec"),
            ("a", "DbARec"),
            ("order-items", "DbOrderItemsRec"),
            ("log2022_entries", "DbLogEntriesRec"),
            ("camelCase", "DbCamelCaseRec"),
            ("__weird__name__", "DbWeirdNameRec"),
            ("x1y", "DbXYRec"),
        ],
    )
    def test_record_name(self, table_name, expected):
        assert record_name(table_name) == expected

    @pytest.mark.parametrize(
        "table_name",
        ["user_accounts", "", "orders", "order-items", "a_b_c", "DbFooRec", "db_rec"],
    )
    def test_record_name_idempotent(self, table_name):
        once = record_name(table_name)
        assert record_name(once) == once

    def test_record_name_custom_affixes(self):
        assert record_name("user_accounts", "", "Row") == "UserAccountsRow"
        assert record_name("UserAccountsRow", "", "Row") == "UserAccountsRow"

    def test_record_name_lowercase_shape_is_not_treated_as_generated(self):
        assert record_name("db_stuff_rec") == "DbDbStuffRecRec"

    def test_record_name_non_ascii_letters_kept(self):
        assert record_name("über_table") == "DbüberTableRec"

    def test_record_name_caching(self):
        result1 = record_name("user_accounts")
        result2 = record_name("user_accounts")
        assert result1 == result2 == "DbUserAccountsRec"


class TestSanitizeModuleName:
    @pytest.mark.parametrize(
        "input_str,expected",
        [
            ("orders", "orders"),
            ("order-items", "order_items"),
            ("Order Items", "Order_Items"),
            ("2fa_codes", "_2fa_codes"),
            ("class", "class_"),
            ("db_types", "db_types_"),
            ("__init__", "__init___"),
            ("", "_"),
        ],
    )
    def test_sanitize_module_name(self, input_str, expected):
        assert sanitize_module_name(input_str) == expected

    def test_result_is_identifier(self):
        assert sanitize_module_name("weird.name$1").isidentifier()


class TestSanitizeFieldName:
    @pytest.mark.parametrize(
        "input_str,expected",
        [
            ("id", "id"),
            ("created_at", "created_at"),
            ("from", "from_"),
            ("class", "class_"),
            ("first name", "first_name"),
            ("1st", "_1st"),
            ("db_types", "db_types"),
            ("type", "type"),
            ("__secret", "_secret"),
            ("___x", "_x"),
            ("__", "_"),
            ("  x", "_x"),
            ("_private", "_private"),
            ("__init__", "_init__"),
        ],
    )
    def test_sanitize_field_name(self, input_str, expected):
        assert sanitize_field_name(input_str) == expected

    def test_all_keywords_sanitized(self):
        for kw in PYTHON_KEYWORDS:
            assert sanitize_field_name(kw) == f"{kw}_"


class TestUniqueName:
    def test_unused_name_kept(self):
        used = set()
        assert unique_name("a_b", used) == "a_b"
        assert used == {"a_b"}

    def test_clashes_get_numeric_suffix(self):
        used = set()
        assert unique_name("a_b", used) == "a_b"
        assert unique_name("a_b", used) == "a_b_2"
        assert unique_name("a_b", used) == "a_b_3"

    def test_suffixed_name_already_taken(self):
        used = {"a_b", "a_b_2"}
        assert unique_name("a_b", used) == "a_b_3"


class TestIsValidIdentifier:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("DbOrdersRec", True),
            ("OrdersRow", True),
            ("1OrdersRec", False),
            ("None", False),
            ("class", False),
            ("", False),
        ],
    )
    def test_is_valid_identifier(self, name, expected):
        assert is_valid_identifier(name) is expected
