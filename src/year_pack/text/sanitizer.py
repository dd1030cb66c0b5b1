"""Text sanitization for user messages.

Removes executable content and masks anything that could identify a user or
leak a credential before text reaches statistics, topics or samples.
Masking is heuristic: it lowers the chance of leaking, it does not prove
absence of secrets.

Pipeline order matters:
  1. code blocks (may contain paths, URLs, ...)
  2. command lines
  3. URLs, which must run before paths so ``https://host/a/b`` is not
     half-masked as a path
  4. paths, emails, IPs, secrets
  5. whitespace normalization
  6. truncation
"""

from __future__ import annotations

import re
from typing import List

from year_pack.constants import MAX_LINE_CHARS, TRUNCATION_MARKER

CODE_BLOCK_PATTERN = re.compile(r"```[\s\S]*?```|~~~[\s\S]*?~~~")
INLINE_CODE_PATTERN = re.compile(r"`[^`]+`")

COMMAND_VERBS = (
    "npm", "yarn", "pnpm", "git", "python", "pip", "node", "deno", "bun",
    "cargo", "go", "make", "docker", "kubectl", "helm", "terraform", "aws",
    "gcloud", "az",
)
COMMAND_LINE_PATTERN = re.compile(
    r"^\s*[$>#]\s*.+$|^\s*(?:" + "|".join(COMMAND_VERBS) + r")\s+.+$",
    re.IGNORECASE | re.MULTILINE,
)

# /abs/path, //host/share, ./rel, ../parent, ~/home, C:\Windows
FILE_PATH_PATTERN = re.compile(r"""(?:~/|\.\.?/|/+(?!/)|[A-Za-z]:\\)[^\s<>"|?*]+""")

URL_PATTERN = re.compile(
    r"""(?:https?|ftp|file)://[^\s<>"\])}]+|www\.[^\s<>"\])}]+""", re.IGNORECASE
)

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")

IPV4_PATTERN = re.compile(r"\b(?:\d{1,3}\.){3}\d{1,3}\b")
IPV6_PATTERN = re.compile(
    r"\b(?:[0-9a-fA-F]{1,4}:){7}[0-9a-fA-F]{1,4}\b"
    # compressed forms take their tail too: 2001:db8::1, fe80::1ff:fe23
    r"|\b(?:[0-9a-fA-F]{1,4}:){1,7}:(?:[0-9a-fA-F]{1,4}(?::[0-9a-fA-F]{1,4})*)?"
    r"|::(?:[0-9a-fA-F]{1,4}:){0,6}[0-9a-fA-F]{1,4}\b"
)

SECRET_PATTERNS = (
    # sk_live_..., api-..., token_..., bearer_...
    re.compile(
        r"\b(?:sk|pk|api|token|key|secret|password|auth|bearer|access)[-_][a-zA-Z0-9_-]{16,}\b",
        re.IGNORECASE,
    ),
    # hashes, hex tokens
    re.compile(r"\b[0-9a-fA-F]{32,}\b"),
    # base64-ish blobs
    re.compile(r"\b[A-Za-z0-9+/=]{40,}\b"),
    # AWS access key ids
    re.compile(r"\bAKIA[0-9A-Z]{16}\b"),
    # GitHub tokens
    re.compile(r"\bgh[pousr]_[a-zA-Z0-9]{36}\b"),
    # npm tokens
    re.compile(r"\bnpm_[a-zA-Z0-9]{36}\b"),
)

PLACEHOLDER_ONLY_PATTERN = re.compile(r"^\s*\[(?:PATH|URL|EMAIL|IP|SECRET|TRUNCATED)\]\s*$")

_CODE_PUNCTUATION = re.compile(r"[{}();]")
_CALL_LIKE = re.compile(r"[a-z]+\s*[({]")
_WHITESPACE = re.compile(r"\s+")


def remove_code_blocks(text: str) -> str:
    """Replace fenced blocks and inline code spans with a single space.

    Repeats until stable: removing one span can pair two leftover backticks
    into a new one, as in ``"``x`y`"``.
    """
    while True:
        stripped = INLINE_CODE_PATTERN.sub(" ", CODE_BLOCK_PATTERN.sub(" ", text))
        if stripped == text:
            return text
        text = stripped


def remove_commands(text: str) -> str:
    return COMMAND_LINE_PATTERN.sub(" ", text)


def mask_urls(text: str) -> str:
    return URL_PATTERN.sub("[URL]", text)


def mask_paths(text: str) -> str:
    return FILE_PATH_PATTERN.sub("[PATH]", text)


def mask_emails(text: str) -> str:
    return EMAIL_PATTERN.sub("[EMAIL]", text)


def mask_ips(text: str) -> str:
    return IPV6_PATTERN.sub("[IP]", IPV4_PATTERN.sub("[IP]", text))


def mask_secrets(text: str) -> str:
    for pattern in SECRET_PATTERNS:
        text = pattern.sub("[SECRET]", text)
    return text


def normalize_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


_MAX_SCRUB_PASSES = 10


def _scrub_once(
    text: str,
    remove_code: bool = True,
    remove_commands_: bool = True,
    mask_paths_: bool = True,
    mask_urls_: bool = True,
    mask_emails_: bool = True,
    mask_ips_: bool = True,
    mask_secrets_: bool = True,
) -> str:
    """Steps 1-8 of the pipeline, everything except truncation."""
    if remove_code:
        text = remove_code_blocks(text)
    if remove_commands_:
        text = remove_commands(text)
    if mask_urls_:
        text = mask_urls(text)
    if mask_paths_:
        text = mask_paths(text)
    if mask_emails_:
        text = mask_emails(text)
    if mask_ips_:
        text = mask_ips(text)
    if mask_secrets_:
        text = mask_secrets(text)
    return normalize_whitespace(text)


def _scrub(text: str, **scrub_flags) -> str:
    """Run ``_scrub_once`` until the text stops changing.

    Whitespace folding and placeholder insertion can bring two fragments
    together into something a pattern matches on the next pass.
    """
    for _ in range(_MAX_SCRUB_PASSES):
        scrubbed = _scrub_once(text, **scrub_flags)
        if scrubbed == text:
            break
        text = scrubbed
    return text


def truncate_text(text: str, max_length: int = MAX_LINE_CHARS, **scrub_flags) -> str:
    """Cut ``text`` to at most ``max_length`` chars, ending in ``[TRUNCATED]``.

    The kept head is shortened until re-scrubbing it is a no-op, so a cut
    that lands inside a maskable token (e.g. leaving ``::1`` of a longer
    word) never produces a string that a second pass would change.
    """
    if max_length < 0:
        max_length = 0
    if len(text) <= max_length:
        return text

    if max_length < len(TRUNCATION_MARKER):
        head, marker = text[:max_length], ""
    else:
        head = text[: max(0, max_length - len(TRUNCATION_MARKER) - 1)]
        marker = TRUNCATION_MARKER

    while True:
        head = head.rstrip()
        candidate = f"{head} {marker}" if head and marker else (head or marker)
        if len(candidate) <= max_length and _scrub(candidate, **scrub_flags) == candidate:
            return candidate
        if not head:
            # marker alone is a fixed point; only an impossible max_length lands here
            return marker[:max_length]
        cut = head.rfind(" ")
        head = head[:cut] if cut > 0 else head[:-1]


def sanitize(
    text: str,
    max_length: int = MAX_LINE_CHARS,
    *,
    remove_code: bool = True,
    remove_commands: bool = True,
    mask_paths: bool = True,
    mask_urls: bool = True,
    mask_emails: bool = True,
    mask_ips: bool = True,
    mask_secrets: bool = True,
    truncate: bool = True,
) -> str:
    """Full sanitization pipeline for a user message.

    Never raises for ``str`` input; text without sensitive content only has
    its whitespace normalized (and is truncated when too long).

    >>> sanitize("Check /usr/local/bin/node or email me at a@b.com")
    'Check [PATH] or email me at [EMAIL]'
    """
    if not text:
        return ""
    flags = dict(
        remove_code=remove_code,
        remove_commands_=remove_commands,
        mask_paths_=mask_paths,
        mask_urls_=mask_urls,
        mask_emails_=mask_emails,
        mask_ips_=mask_ips,
        mask_secrets_=mask_secrets,
    )
    result = _scrub(text, **flags)
    if truncate:
        result = truncate_text(result, max_length, **flags)
    return result


def contains_sensitive_content(text: str) -> bool:
    """Re-scan already sanitized text for anything that slipped through.

    Used as a last gate before text is surfaced verbatim as a sample.
    """
    if FILE_PATH_PATTERN.search(text):
        return True
    if URL_PATTERN.search(text):
        return True
    if EMAIL_PATTERN.search(text):
        return True
    if IPV4_PATTERN.search(text) or IPV6_PATTERN.search(text):
        return True

    # code-like: punctuation plus something that looks like a call or block
    if _CODE_PUNCTUATION.search(text) and _CALL_LIKE.search(text):
        return True

    return any(pattern.search(text) for pattern in SECRET_PATTERNS)


def is_placeholder_only(text: str) -> bool:
    return bool(PLACEHOLDER_ONLY_PATTERN.match(text))


def get_applied_filters(
    *,
    remove_code: bool = True,
    remove_commands: bool = True,
    mask_paths: bool = True,
    mask_urls: bool = True,
    mask_emails: bool = True,
    mask_ips: bool = True,
    mask_secrets: bool = True,
    truncate: bool = True,
) -> List[str]:
    """Names of the filters ``sanitize`` applies with the same flags."""
    filters = ["user_messages_only"]
    if remove_code:
        filters.append("code_blocks_removed")
    if remove_commands:
        filters.append("commands_removed")
    if mask_paths:
        filters.append("paths_masked")
    if mask_urls:
        filters.append("urls_masked")
    if mask_emails:
        filters.append("emails_masked")
    if mask_ips:
        filters.append("ips_masked")
    if mask_secrets:
        filters.append("secrets_masked")
    if truncate:
        filters.append("truncated_long_text")
    return filters
