"""Tests for the argument validators."""

import pytest

from discord_approval.interaction import validation


class TestOptions:
    @pytest.mark.parametrize("count, ok", [(1, False), (2, True), (25, True), (26, False)])
    def test_option_count_boundaries(self, count, ok):
        error = validation.validate_options([f"opt{i}" for i in range(count)])
        assert (error is None) is ok

    def test_too_few_message(self):
        assert validation.validate_options(["only"]) == "At least 2 options are required"

    def test_too_many_message(self):
        error = validation.validate_options([str(i) for i in range(26)])
        assert error == "No more than 25 options are allowed"

    def test_non_list_rejected(self):
        assert validation.validate_options("a,b") == "options must be a list of strings"


class TestPoll:
    OPTIONS = ["A", "B", "C", "D"]

    def test_unset_max_defaults_to_option_count(self):
        assert validation.effective_max_selections(4, None) == 4
        assert validation.validate_poll(self.OPTIONS, 0, None) is None
        assert validation.validate_poll(self.OPTIONS, 4, None) is None

    def test_explicit_max_kept(self):
        assert validation.effective_max_selections(4, 2) == 2

    def test_each_violation_has_its_own_message(self):
        messages = {
            validation.validate_poll(self.OPTIONS, -1, None),
            validation.validate_poll(self.OPTIONS, 5, None),
            validation.validate_poll(self.OPTIONS, 0, 0),
            validation.validate_poll(self.OPTIONS, 0, 5),
            validation.validate_poll(self.OPTIONS, 3, 2),
        }
        assert None not in messages
        assert len(messages) == 5

    def test_min_greater_than_max_fails(self):
        error = validation.validate_poll(self.OPTIONS, 3, 2)
        assert error == "min_selections must not exceed max_selections"

    def test_option_count_checked_first(self):
        assert validation.validate_poll(["A"], 5, 0) == "At least 2 options are required"

    def test_bounds_inclusive(self):
        assert validation.validate_poll(self.OPTIONS, 0, 1) is None
        assert validation.validate_poll(self.OPTIONS, 4, 4) is None
        assert validation.validate_poll(self.OPTIONS, 2, 2) is None


class TestReminderDelay:
    @pytest.mark.parametrize("delay, ok", [(0, False), (1, True), (3600, True), (3601, False), (-5, False)])
    def test_delay_bounds(self, delay, ok):
        assert (validation.validate_reminder_delay(delay) is None) is ok


class TestTextInput:
    def test_title_boundary(self):
        assert validation.validate_text_input("x" * 45, "prompt", None, 300) is None
        assert validation.validate_text_input("x" * 46, "prompt", None, 300) == (
            "title must be 45 characters or fewer"
        )

    @pytest.mark.parametrize("title", ["", "   ", "\t\n"])
    def test_blank_title(self, title):
        assert validation.validate_text_input(title, "prompt", None, 300) == "title is required"

    @pytest.mark.parametrize("prompt", ["", "   "])
    def test_blank_prompt(self, prompt):
        assert validation.validate_text_input("Title", prompt, None, 300) == "prompt is required"

    def test_placeholder_boundary(self):
        assert validation.validate_text_input("T", "P", "p" * 100, 300) is None
        assert validation.validate_text_input("T", "P", "p" * 101, 300) == (
            "placeholder must be 100 characters or fewer"
        )

    @pytest.mark.parametrize("timeout, ok", [(0, False), (1, True), (900, True), (901, False)])
    def test_timeout_bounds(self, timeout, ok):
        assert (validation.validate_text_input("T", "P", None, timeout) is None) is ok


class TestDiffAndReason:
    def test_diff_requires_message_and_diff(self):
        assert validation.validate_diff_confirm(" ", "+a", 300) == "message is required"
        assert validation.validate_diff_confirm("msg", "  ", 300) == "diff is required"
        assert validation.validate_diff_confirm("msg", "+a", 300) is None

    def test_diff_timeout(self):
        assert validation.validate_diff_confirm("msg", "+a", 901) is not None

    def test_reason_whitespace_message_is_blank(self):
        assert validation.validate_reason_approval("   ", 300) == "message is required"
        assert validation.validate_reason_approval("Ship it?", 0) is not None
        assert validation.validate_reason_approval("Ship it?", 900) is None


class TestStatusAndThread:
    def test_status(self):
        for status in ("success", "error", "warning", "info"):
            assert validation.validate_status(status) is None
        assert "success, error, warning, info" in validation.validate_status("debug")

    def test_thread_name(self):
        assert validation.validate_thread_name("") == "name is required"
        assert validation.validate_thread_name("n" * 100) is None
        assert validation.validate_thread_name("n" * 101) is not None
