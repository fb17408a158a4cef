"""Services composing the email from a parameter file."""

from mailcomposer.services.body_generator import generate_body
from mailcomposer.services.config_parser import parse_parameter_file
from mailcomposer.services.email_service import EmailService
from mailcomposer.services.footer import inject_footer
from mailcomposer.services.message_assembler import assemble_message
from mailcomposer.services.template_engine import expand_template

__all__ = [
    "EmailService",
    "parse_parameter_file",
    "generate_body",
    "expand_template",
    "inject_footer",
    "assemble_message",
]
