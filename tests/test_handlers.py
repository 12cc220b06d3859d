"""Tests for the builtin handlers."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from rulekit.checker import Checker
from rulekit.handlers import DEFAULT_MESSAGES, builtin_handlers, cards, dates, network, numbers, strings


def test_every_builtin_has_a_message():
    for name in builtin_handlers():
        assert name in DEFAULT_MESSAGES


# =============================================================================
# Strings
# =============================================================================


class TestStrings:
    @pytest.mark.parametrize("value", [True, False, "yes", "No", "on", "0", 1, ""])
    def test_accepted(self, value):
        assert strings.accepted(value, {})

    @pytest.mark.parametrize("value", ["maybe", None, 2.5, []])
    def test_not_accepted(self, value):
        assert not strings.accepted(value, {})

    def test_alpha_numeric(self):
        assert strings.alpha_numeric("abc123", {})
        assert strings.alpha_numeric("héllo1", {})
        assert not strings.alpha_numeric("abc_1", {})
        assert not strings.alpha_numeric("a b", {})
        assert not strings.alpha_numeric("", {})

    def test_boolean(self):
        for value in (True, False, 0, 1, "0", "1"):
            assert strings.boolean(value, {})
        for value in ("true", 2, None, ""):
            assert not strings.boolean(value, {})

    def test_equal_to(self):
        options = {"key": "password", "data": {"password": "s3cret"}}

        assert strings.equal_to("s3cret", options)
        assert not strings.equal_to("other", options)
        assert not strings.equal_to("s3cret", {"key": "password"})

    def test_in_list_matches_string_form(self):
        assert strings.in_list("1", {"list": [1, 2]})
        assert strings.in_list(2, {"list": ["1", "2"]})
        assert not strings.in_list("3", {"list": [1, 2]})

    def test_in_list_blank_and_boolean_values_are_strict(self):
        assert not strings.in_list("", {"list": [0]})
        assert not strings.in_list(False, {"list": [0]})
        assert strings.in_list(None, {"list": [None]})
        assert strings.in_list(False, {"list": [False]})

    def test_in_list_without_list(self):
        assert not strings.in_list("a", {})

    def test_lengths(self):
        assert strings.length("abc", {"length": 3})
        assert not strings.length("abcd", {"length": 3})
        assert strings.length_between("abc", {"min": 1, "max": 3})
        assert not strings.length_between("abcd", {"min": 1, "max": 3})
        assert strings.length_max("ab", {"length": 2})
        assert not strings.length_max("abc", {"length": 2})
        assert strings.length_min("ab", {"length": 2})
        assert not strings.length_min("a", {"length": 2})

    def test_length_of_collections(self):
        assert strings.length(["a", "b"], {"length": 2})

    def test_regex(self):
        assert strings.regex(r"^\d+$", {})
        assert not strings.regex("[a-", {})
        assert not strings.regex("", {})

    @pytest.mark.parametrize("name, valid, invalid", [
        ("phone", "+1(555)123-4567", "555-12"),
        ("time", "23:59", "24:00"),
        ("time", "11:30pm", "13:30pm"),
        ("uuid", "123e4567-e89b-12d3-a456-426614174000", "123e4567-e89b-12d3-a456"),
        ("empty", "   ", "x"),
    ])
    def test_pattern_handlers(self, name, valid, invalid):
        assert Checker.is_valid(name, valid)
        assert not Checker.is_valid(name, invalid)


# =============================================================================
# Numbers
# =============================================================================


class TestNumbers:
    @pytest.mark.parametrize("value", [12, "12", " -4 ", 3.0, Decimal("7")])
    def test_integer(self, value):
        assert numbers.integer(value, {})

    @pytest.mark.parametrize("value", ["1.5", 1.5, True, "", "012", None])
    def test_not_integer(self, value):
        assert not numbers.integer(value, {})

    def test_numeric(self):
        for value in (1, 2.5, "1e3", ".5", "-3"):
            assert numbers.numeric(value, {})
        for value in ("abc", "", None, True, float("nan")):
            assert not numbers.numeric(value, {})

    def test_decimal_precision(self):
        assert numbers.decimal("3.14", {})
        assert numbers.decimal("3.14", {"precision": 2})
        assert not numbers.decimal("3.14", {"precision": 3})
        assert not numbers.decimal("3.1.4", {})

    def test_in_range(self):
        assert numbers.in_range(5, {"lower": 1, "upper": 10})
        assert numbers.in_range("10", {"lower": 1, "upper": 10})
        assert not numbers.in_range("11", {"lower": 1, "upper": 10})
        assert not numbers.in_range("", {"lower": 1, "upper": 10})

    def test_in_range_string_bounds(self):
        assert numbers.in_range(5, {"lower": "1", "upper": "10"})

    def test_min_and_max(self):
        assert numbers.maximum("5", {"max": 5})
        assert not numbers.maximum("15", {"max": 5})
        assert numbers.minimum(5, {"min": 5})
        assert not numbers.minimum(4.9, {"min": 5})
        assert not numbers.minimum(5, {})

    def test_money(self):
        assert Checker.is_valid("money", "$1,000.00")
        assert Checker.is_valid("money", "1.000,00€")
        assert Checker.is_valid("money", "12")
        assert not Checker.is_valid("money", "1,00,0")
        assert not Checker.is_valid("money", "¢12")

    def test_money_side_selection(self):
        assert Checker.is_valid("money", "$12.00", {"check": "left"})
        assert not Checker.is_valid("money", "$12.00", {"check": "right"})
        assert Checker.is_valid("money", "12.00€", {"check": "right"})


# =============================================================================
# Dates
# =============================================================================


class TestDates:
    @pytest.mark.parametrize("value", [
        "2024-02-29",
        "2024-02-29 10:00:00",
        "2024/02/29",
        "12/25/2024",
        "25 December 2024",
        date(2024, 1, 1),
        datetime(2024, 1, 1, 12, 0),
    ])
    def test_date(self, value):
        assert dates.date(value, {})

    @pytest.mark.parametrize("value", ["2023-02-29", "yesterday", "", None, 20240101])
    def test_not_date(self, value):
        assert not dates.date(value, {})

    def test_date_after(self):
        options = {"date": datetime(2015, 12, 31, 11, 59, 59)}

        assert dates.date_after("2016-01-01", options)
        result = dates.date_after("2014-12-31 11:59:59", options)
        assert not result
        assert result.params == {"date": "2015-12-31 11:59:59"}

    def test_date_before(self):
        options = {"date": "2015-12-31"}

        assert dates.date_before(date(2015, 1, 1), options)
        assert not dates.date_before("2016-01-01", options)

    def test_date_bound_is_required(self):
        assert not dates.date_after("2016-01-01", {})

    def test_date_format(self):
        assert dates.date_format("2024-01-31", {"format": "%Y-%m-%d"})
        assert not dates.date_format("31/01/2024", {"format": "%Y-%m-%d"})

    def test_date_format_default(self):
        result = dates.date_format("2024-01-31 10:00:00", {"format": "any"})

        assert result
        assert result.params == {"format": "%Y-%m-%d %H:%M:%S"}


# =============================================================================
# Cards
# =============================================================================


class TestCards:
    def test_luhn(self):
        assert cards.luhn("4111111111111111", {})
        assert cards.luhn(79927398713, {})
        assert not cards.luhn("4111111111111112", {})
        assert not cards.luhn("4111-1111", {})

    @pytest.mark.parametrize("number, brand", [
        ("4111111111111111", "visa"),
        ("378282246310005", "amex"),
        ("5555555555554444", "mc"),
        ("6011111111111117", "disc"),
    ])
    def test_brands(self, number, brand):
        assert cards.credit_card(number, {})
        assert cards.credit_card(number, {"check": brand})

    def test_brand_selection(self):
        assert not cards.credit_card("4111111111111111", {"check": "amex"})
        assert cards.credit_card("4111111111111111", {"check": ["amex", "visa"]})

    def test_separators_are_ignored(self):
        assert cards.credit_card("4111-1111-1111-1111", {})
        assert cards.credit_card("4111 1111 1111 1111", {})

    def test_deep_applies_luhn(self):
        assert cards.credit_card("4111111111111112", {})
        assert not cards.credit_card("4111111111111112", {"deep": True})
        assert cards.credit_card("4111111111111111", {"deep": True})

    def test_short_numbers_fail(self):
        assert not cards.credit_card("4111", {})
        assert not cards.credit_card("", {})


# =============================================================================
# Network
# =============================================================================


class TestNetwork:
    def test_email(self):
        assert network.email("john.doe+tag@example.co.uk", {})
        assert not network.email("john@", {})
        assert not network.email("john@localhost", {})
        assert not network.email(None, {})

    def test_email_deep_resolves_domain(self, monkeypatch):
        resolved = []

        def fake_getaddrinfo(host, port):
            resolved.append(host)
            return [("addr",)]

        monkeypatch.setattr(network.socket, "getaddrinfo", fake_getaddrinfo)

        assert network.email("me@example.com", {"deep": True})
        assert resolved == ["example.com"]

    def test_email_deep_fails_for_unknown_domain(self, monkeypatch):
        def fake_getaddrinfo(host, port):
            raise OSError("Name or service not known")

        monkeypatch.setattr(network.socket, "getaddrinfo", fake_getaddrinfo)

        assert not network.email("me@nowhere.invalid", {"deep": True})

    def test_ip(self):
        assert network.ip("127.0.0.1", {})
        assert network.ip("::1", {})
        assert network.ip("::1", {"version": 6})
        assert not network.ip("::1", {"version": 4})
        assert not network.ip("256.1.1.1", {})
        assert not network.ip("", {})

    def test_url(self):
        assert network.url("https://example.com/path?q=1", {})
        assert network.url("ftp://files.example.com", {})
        assert network.url("mailto:me@example.com", {})
        assert not network.url("example.com", {})
        assert not network.url("http://", {})
        assert not network.url("http://exa mple.com", {})

    def test_url_schemes(self):
        assert network.url("https://example.com", {"schemes": ["https"]})
        assert not network.url("http://example.com", {"schemes": ["https"]})
