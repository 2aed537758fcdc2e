"""Tests for message rendering helpers."""

import pytest

from discord_approval.interaction import render


class TestLanguageFor:
    @pytest.mark.parametrize(
        "filename,expected",
        [
            ("app.py", "python"),
            ("src/index.TS", "typescript"),
            ("config.yml", "yaml"),
            ("script.sh", "bash"),
            ("Makefile", "diff"),
            ("notes.xyz", "diff"),
            (None, "diff"),
        ],
    )
    def test_extension_mapping(self, filename, expected):
        assert render.language_for(filename) == expected


class TestMessages:
    def test_timed_out_strikes_original(self):
        assert render.timed_out("Deploy?").content == "⏰ **Timed out**\n\n~~Deploy?~~"

    def test_approval_decided_has_no_controls(self):
        decided = render.approval_decided("Deploy?", True)
        assert decided.content.startswith("✅ **Approved**")
        assert decided.controls == []

    def test_reason_decided_without_reason(self):
        decided = render.reason_decided("Deploy?", False, None)
        assert "Reason" not in decided.content

    def test_reason_form(self):
        form = render.reason_form("reason_form:abc", approved=False)
        assert form.title == "Reason for denial"
        assert form.required is False
        assert form.field_id == render.REASON_FIELD

    def test_poll_hint_without_minimum(self):
        message = render.poll_request("Q?", ["a", "b"], "poll:abc", 0, 2)
        assert "_Choose up to 2_" in message.content
        assert message.controls[0].placeholder == "Choose up to 2..."

    def test_poll_answered_none(self):
        assert "(none)" in render.poll_answered("Q?", []).content

    def test_text_input_placeholder_omitted(self):
        form = render.text_input_form("text_input_modal:abc", "T", "Prompt", "", False)
        assert form.placeholder is None

    @pytest.mark.parametrize(
        "status,color,title",
        [
            ("success", render.GREEN, "✅ Success"),
            ("error", render.RED, "❌ Error"),
            ("warning", render.YELLOW, "⚠️ Warning"),
            ("info", render.BLURPLE, "ℹ️ Info"),
        ],
    )
    def test_status_colours(self, status, color, title):
        embed = render.status_notification("msg", status).embed
        assert embed.color == color
        assert embed.title == title
        assert embed.fields == []

    def test_diff_decided_keeps_panel_body(self):
        panel = render.diff_panel("Fix", "+a", "x.go")
        decided = render.diff_decided(panel, approved=False).embed
        assert decided.description == panel.description
        assert decided.title == "❌ Denied"
        assert panel.title == "📝 Review code change"
