"""Text helpers shared by the planning services.

- slugify: URL slug from a keyword or title
- title_case_words: Capitalize the first letter of every word
- truncate_text: Cut text to a maximum length with an ellipsis
"""

import re

UNTITLED_SLUG = "untitled"
ELLIPSIS = "..."


def slugify(text: str) -> str:
    """Convert text to a URL-safe slug.

    Lowercases, drops everything except ``[a-z0-9]``, whitespace and hyphens,
    collapses whitespace/hyphen runs into a single hyphen and strips leading
    and trailing hyphens. Returns "untitled" when nothing is left.

    The result only contains ``[a-z0-9-]``, so slugify(slugify(x)) == slugify(x).
    """
    slug = text.strip().lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"[\s-]+", "-", slug)
    slug = slug.strip("-")
    return slug or UNTITLED_SLUG


def title_case_words(text: str) -> str:
    """Upper-case the first character of each space-separated word.

    Unlike str.title(), the rest of each word is left untouched, so
    acronyms such as "SEO" or "CRM" survive.
    """
    return " ".join(word[:1].upper() + word[1:] for word in text.split(" "))


def truncate_text(text: str, max_length: int) -> str:
    """Cut text to at most max_length characters, ending with "..." when cut."""
    if len(text) <= max_length:
        return text
    return text[: max_length - len(ELLIPSIS)] + ELLIPSIS
