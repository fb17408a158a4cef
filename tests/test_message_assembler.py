"""Tests for MIME part ordering and the rendered message."""

from dataclasses import replace

from mailcomposer.models import BodyContext, BodyStrategy, InlineResource, PartRole
from mailcomposer.services.message_assembler import assemble_message, sniff_image_type


def _html_context(logo_file=None):
    context = BodyContext(
        strategy=BodyStrategy.DEFAULT_HTML,
        body="<html><body><img src='cid:logo_1@mailcomposer'>Hi</body></html>",
    )
    if logo_file is not None:
        context.register_inline_resource(
            InlineResource(content_id="logo_1@mailcomposer", path=str(logo_file))
        )
    return context


class TestAssembleMessage:
    def test_plain_text_single_part(self, base_config):
        context = BodyContext(strategy=BodyStrategy.PLAIN_TEXT, body="Hello")

        message = assemble_message(base_config, context)

        assert len(message.parts) == 1
        assert message.body_part.content_type == "text/plain"
        assert message.body_part.payload == "Hello"

    def test_part_order_body_inline_attachments(self, base_config, tmp_path, logo_file):
        first = tmp_path / "a.pdf"
        first.write_bytes(b"%PDF-1.4 a")
        second = tmp_path / "b.csv"
        second.write_bytes(b"x,y")
        config = replace(base_config, attachment_paths=(str(first), str(second)))

        message = assemble_message(config, _html_context(logo_file))

        assert [part.role for part in message.parts] == [
            PartRole.BODY,
            PartRole.INLINE,
            PartRole.ATTACHMENT,
            PartRole.ATTACHMENT,
        ]
        inline = message.parts[1]
        assert inline.content_type == "image/png"
        assert inline.content_id == "logo_1@mailcomposer"
        assert inline.disposition == "inline"
        assert [part.filename for part in message.parts[2:]] == ["a.pdf", "b.csv"]
        assert message.parts[2].content_type == "application/pdf"

    def test_single_attachment_used_without_list(self, base_config, tmp_path):
        report = tmp_path / "report.xlsx"
        report.write_bytes(b"data")
        config = replace(base_config, attachment_path=str(report))

        message = assemble_message(config, BodyContext(BodyStrategy.PLAIN_TEXT, "x"))

        attachments = message.parts_with_role(PartRole.ATTACHMENT)
        assert [part.filename for part in attachments] == ["report.xlsx"]

    def test_unreadable_attachment_is_skipped(self, base_config, tmp_path):
        good = tmp_path / "good.txt"
        good.write_text("ok")
        config = replace(base_config, attachment_paths=(str(tmp_path / "missing.pdf"), str(good)))

        message = assemble_message(config, BodyContext(BodyStrategy.PLAIN_TEXT, "x"))

        assert [part.filename for part in message.parts_with_role(PartRole.ATTACHMENT)] == ["good.txt"]

    def test_missing_logo_is_skipped(self, base_config, tmp_path):
        message = assemble_message(base_config, _html_context(tmp_path / "nope.png"))

        assert message.parts_with_role(PartRole.INLINE) == []

    def test_headers_and_envelope(self, base_config):
        config = replace(
            base_config,
            bcc=("hidden@z.com",),
            reply_to="r@x.com",
            read_receipt=True,
            from_address="boss@x.com",
        )

        message = assemble_message(config, BodyContext(BodyStrategy.PLAIN_TEXT, "x"))
        mime = message.to_email_message()

        assert mime["From"] == "boss@x.com"
        assert mime["To"] == "b@y.com"
        assert mime["Reply-To"] == "r@x.com"
        assert mime["Disposition-Notification-To"] == "boss@x.com"
        assert mime["Bcc"] is None
        assert message.envelope_recipients() == ["b@y.com", "hidden@z.com"]


class TestToEmailMessage:
    def test_mime_tree(self, base_config, tmp_path, logo_file):
        attachment = tmp_path / "a.pdf"
        attachment.write_bytes(b"%PDF-1.4")
        config = replace(base_config, attachment_path=str(attachment))

        mime = assemble_message(config, _html_context(logo_file)).to_email_message()

        assert [part.get_content_type() for part in mime.walk()] == [
            "multipart/mixed",
            "multipart/related",
            "text/html",
            "image/png",
            "application/pdf",
        ]
        logo = list(mime.walk())[3]
        assert logo["Content-ID"] == "<logo_1@mailcomposer>"
        assert logo.get_content_disposition() == "inline"
        pdf = list(mime.walk())[4]
        assert pdf.get_content_disposition() == "attachment"
        assert pdf.get_filename() == "a.pdf"

    def test_plain_text_message(self, base_config):
        mime = assemble_message(
            base_config, BodyContext(BodyStrategy.PLAIN_TEXT, "Hello")
        ).to_email_message()

        assert mime.get_content_type() == "text/plain"
        assert "Hello" in mime.get_content()


def test_sniff_image_type(logo_file):
    assert sniff_image_type(logo_file.read_bytes()) == "image/png"
    assert sniff_image_type(b"not an image") is None
