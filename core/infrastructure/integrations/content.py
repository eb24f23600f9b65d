"""
Content extraction helpers for integration adapters.

Pure functions over generated text. Platform limits:
LinkedIn 1300, Facebook 2000, Twitter 280 characters.
"""
import html
import json
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

LINKEDIN_MAX_CHARS = 1300
FACEBOOK_MAX_CHARS = 2000
TWITTER_MAX_CHARS = 280

DEFAULT_EMAIL_SUBJECT = "AI Generated Email Campaign"
DEFAULT_EMAIL_RECIPIENT = "test@example.com"

EMAIL_ADDRESS_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
SUBJECT_PATTERN = re.compile(r"Subject:\s*(.+)", re.IGNORECASE)
_SLUG_STRIP = re.compile(r"[^a-z0-9]+")


@dataclass(frozen=True)
class EmailContent:
    """Email fields extracted from generated text."""
    to: List[str]
    subject: str
    text_body: str
    html_body: str


def truncate(text: str, limit: int) -> str:
    """Cut ``text`` to at most ``limit`` characters. Idempotent."""
    return text[:limit]


def extract_deliverable(payload: Mapping[str, Any]) -> Optional[str]:
    """Return the deliverable text stored at ``payload["result"]["deliverable"]``."""
    result = payload.get("result") if payload else None
    if not isinstance(result, Mapping):
        return None
    deliverable = result.get("deliverable")
    if deliverable is None or deliverable == "":
        return None
    if not isinstance(deliverable, str):
        return json.dumps(deliverable, default=str)
    return deliverable


def parse_email_content(content: str) -> EmailContent:
    """
    Extract subject, recipients and bodies from generated email text.

    A ``Subject:`` line becomes the subject and is removed from the body.
    Every address found in the text becomes a recipient; with none found the
    placeholder recipient is used.
    """
    subject = DEFAULT_EMAIL_SUBJECT
    text_body = content

    subject_match = SUBJECT_PATTERN.search(content)
    if subject_match:
        subject = subject_match.group(1).strip()
        text_body = content.replace(subject_match.group(0), "", 1).strip()

    recipients = EMAIL_ADDRESS_PATTERN.findall(content) or [DEFAULT_EMAIL_RECIPIENT]

    return EmailContent(
        to=recipients,
        subject=subject,
        text_body=text_body,
        html_body=convert_to_html(text_body),
    )


def convert_to_html(text: str) -> str:
    """Wrap plain text into a minimal styled HTML email."""
    paragraphs = html.escape(text).replace("\n\n", "</p><p>").replace("\n", "<br>")
    return (
        "<html>\n"
        '  <body style="font-family: Arial, sans-serif; line-height: 1.6; '
        'max-width: 600px; margin: 0 auto; padding: 20px;">\n'
        '    <div style="background-color: #f4f4f4; padding: 20px; border-radius: 10px;">\n'
        f"      <p>{paragraphs}</p>\n"
        "    </div>\n"
        '    <footer style="text-align: center; padding: 20px; color: #666; font-size: 12px;">\n'
        "      <p>Sent by your AI Email Campaign Agent</p>\n"
        "    </footer>\n"
        "  </body>\n"
        "</html>"
    )


def parse_linkedin_content(content: str) -> Dict[str, str]:
    return {"text": truncate(content, LINKEDIN_MAX_CHARS)}


def parse_facebook_content(content: str) -> Dict[str, str]:
    return {"text": truncate(content, FACEBOOK_MAX_CHARS)}


def parse_twitter_content(content: str) -> Dict[str, str]:
    return {"text": truncate(content, TWITTER_MAX_CHARS)}


def parse_product_content(content: str) -> Dict[str, Any]:
    # price in cents
    return {"name": "Generated Product", "price": 1999, "description": content}


def parse_lead_content(content: str) -> Dict[str, Any]:
    return {"email": "lead@example.com", "name": "Generated Lead", "notes": content}


def parse_blog_content(content: str) -> Dict[str, str]:
    """First non-blank line is the title; the slug is derived from it."""
    title = next((line.strip() for line in content.splitlines() if line.strip()), "")
    title = title.lstrip("#").strip() or "Generated Blog Post"
    return {"title": title, "content": content, "slug": slugify(title)}


def slugify(text: str) -> str:
    slug = _SLUG_STRIP.sub("-", text.lower()).strip("-")
    return slug or "generated-blog-post"
