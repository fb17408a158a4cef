"""Tests for body strategy selection and HTML synthesis."""

from dataclasses import replace
from datetime import datetime

from mailcomposer.models import BodyStrategy, EmailConfiguration
from mailcomposer.services.body_generator import generate_body, wants_html

NOW = datetime(2024, 1, 2, 3, 4)


class TestStrategySelection:
    def test_plain_text_by_default(self, base_config):
        context = generate_body(base_config)

        assert context.strategy is BodyStrategy.PLAIN_TEXT
        assert context.body == "Hello"
        assert not context.is_html
        assert context.inline_resources == []

    def test_any_html_trigger_selects_default_html(self, base_config):
        assert wants_html(EmailConfiguration(use_html=True))
        assert wants_html(EmailConfiguration(logo_path="l.png"))
        assert wants_html(EmailConfiguration(signature_file="s.html"))
        assert not wants_html(base_config)

    def test_template_strategy(self, base_config, tmp_path):
        template = tmp_path / "t.html"
        template.write_text("<html><body>{USER_MESSAGE} on {DATE}</body></html>", encoding="utf-8")
        config = replace(base_config, html_template=str(template))

        context = generate_body(config, now=NOW)

        assert context.strategy is BodyStrategy.TEMPLATE
        assert context.body == "<html><body>Hello on 02/01/2024</body></html>"
        assert context.fallback_events == []

    def test_missing_template_falls_back_as_if_unset(self, base_config, tmp_path):
        config = replace(base_config, html_template=str(tmp_path / "gone.html"))

        context = generate_body(config, now=NOW)
        unset = generate_body(base_config, now=NOW)

        assert context.strategy is unset.strategy
        assert context.body == unset.body
        assert len(context.fallback_events) == 1
        assert "gone.html" in context.fallback_events[0]

    def test_template_logo_placeholder_registers_resource(self, base_config, tmp_path, logo_file):
        template = tmp_path / "t.html"
        template.write_text('<img src="{LOGO}">', encoding="utf-8")
        config = replace(base_config, html_template=str(template), logo_path=str(logo_file))

        context = generate_body(config)

        assert len(context.inline_resources) == 1
        assert f"cid:{context.inline_resources[0].content_id}" in context.body

    def test_template_with_missing_logo_file_has_no_cid(self, base_config, tmp_path):
        template = tmp_path / "t.html"
        template.write_text('<img src="{LOGO}">', encoding="utf-8")
        config = replace(
            base_config, html_template=str(template), logo_path=str(tmp_path / "missing.png")
        )

        context = generate_body(config)

        assert context.strategy is BodyStrategy.TEMPLATE
        assert context.body == '<img src="">'
        assert context.inline_resources == []
        assert len(context.fallback_events) == 1
        assert "missing.png" in context.fallback_events[0]


class TestDefaultHtml:
    def test_markdown_is_wrapped_in_document(self, base_config):
        config = replace(base_config, body="# Title\n**hi**", use_html=True)

        context = generate_body(config)

        assert context.strategy is BodyStrategy.DEFAULT_HTML
        assert context.body.startswith("<html><body")
        assert "<h1>Title</h1><p><strong>hi</strong></p>" in context.body
        assert context.body.endswith("</body></html>")

    def test_logo_precedes_synthesized_content(self, base_config, logo_file):
        config = replace(base_config, logo_path=str(logo_file))

        context = generate_body(config)

        assert len(context.inline_resources) == 1
        cid = context.inline_resources[0].content_id
        assert context.body.index(f"cid:{cid}") < context.body.index("<p>Hello</p>")

    def test_logo_follows_opening_body_tag_of_full_html(self, base_config, logo_file):
        body = "<!DOCTYPE html><html><body style='x'><p>Hi</p></body></html>"
        config = replace(base_config, body=body, logo_path=str(logo_file))

        context = generate_body(config)

        cid = context.inline_resources[0].content_id
        assert context.body.startswith(f"<!DOCTYPE html><html><body style='x'><img src=\"cid:{cid}\"")
        assert context.body.endswith("<p>Hi</p></body></html>")

    def test_signature_goes_before_closing_body(self, base_config, tmp_path):
        signature = tmp_path / "sig.html"
        signature.write_text("<i>Dana</i>", encoding="utf-8")
        config = replace(base_config, signature_file=str(signature))

        context = generate_body(config)

        assert context.body.endswith("<p>Hello</p><i>Dana</i></body></html>")

    def test_unreadable_signature_is_skipped(self, base_config, tmp_path):
        config = replace(base_config, signature_file=str(tmp_path / "missing.html"))

        context = generate_body(config)

        assert context.strategy is BodyStrategy.DEFAULT_HTML
        assert context.body.endswith("<p>Hello</p></body></html>")

    def test_missing_logo_file_is_left_out(self, base_config, tmp_path):
        config = replace(base_config, logo_path=str(tmp_path / "missing.png"))

        context = generate_body(config)

        assert context.strategy is BodyStrategy.DEFAULT_HTML
        assert "<img" not in context.body
        assert "cid:" not in context.body
        assert context.inline_resources == []
        assert context.fallback_events == [f"Logo not found: {tmp_path / 'missing.png'}"]
