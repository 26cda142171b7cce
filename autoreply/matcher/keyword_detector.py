"""Keyword detection and template ranking.

All functions here are pure: they never mutate the email text or the
template sequence, and malformed input degrades to an empty result
instead of raising.
"""

import logging
from typing import Iterable, Sequence

from autoreply.templates.models import Template

from .models import DetectionResult, MatchEntry
from .tokenizer import extract_ngrams, tokenize

logger = logging.getLogger(__name__)


def normalize_trigger(trigger: str) -> str:
    """Normalize a trigger phrase for comparison (lowercase, trimmed)."""
    return trigger.lower().strip()


def _trigger_detected(
    trigger: str,
    token_set: set[str],
    phrases: set[str],
    lowered_text: str,
) -> bool:
    """Check a normalized trigger against the three detection rules.

    A: equals a token, bigram or trigram.
    B: every word of the trigger appears somewhere among the tokens.
    C: is a literal substring of the lowercased original text.
    """
    if trigger in phrases:
        return True

    if all(word in token_set for word in trigger.split()):
        return True

    return trigger in lowered_text


def detect_keywords(email_text: str | None, templates: Iterable[Template]) -> list[str]:
    """Detect which template triggers occur in the email text.

    Args:
        email_text: Raw email text as pasted by the user.
        templates: Templates whose triggers should be checked.

    Returns:
        Normalized trigger phrases that were detected, in the order they
        were first found, each listed once even if shared by several
        templates.
    """
    tokens = tokenize(email_text)
    bigrams = extract_ngrams(tokens, 2)
    trigrams = extract_ngrams(tokens, 3)
    token_set = set(tokens)
    phrases = set(tokens + bigrams + trigrams)
    lowered_text = (email_text or "").lower()

    # dict keeps first-discovered order while de-duplicating
    detected: dict[str, None] = {}

    for template in templates:
        for trigger in template.triggers:
            normalized = normalize_trigger(trigger)
            if not normalized or normalized in detected:
                continue
            if _trigger_detected(normalized, token_set, phrases, lowered_text):
                detected[normalized] = None

    logger.debug(
        "Detected %d keywords from %d tokens: %s",
        len(detected), len(tokens), list(detected),
    )
    return list(detected)


def calculate_match_score(template: Template, detected_keywords: Iterable[str]) -> float:
    """Score a template as the fraction of its triggers that were detected.

    Not normalized across templates: a template with few, specific
    triggers scores higher per hit than a generic one with many.

    Returns:
        Score in [0, 1]. 0 when nothing was detected or the template has
        no triggers.
    """
    keywords = set(detected_keywords)
    if not keywords or not template.triggers:
        return 0.0

    match_count = sum(
        1 for trigger in template.triggers if normalize_trigger(trigger) in keywords
    )
    return match_count / len(template.triggers)


def find_matching_templates(
    email_text: str | None, templates: Sequence[Template]
) -> DetectionResult:
    """Rank templates by relevance to the email text.

    Templates scoring 0 are dropped. Equal scores keep the input template
    order.

    Args:
        email_text: Raw email text.
        templates: The template library to rank.

    Returns:
        DetectionResult with the detected keywords and the ranked matches.
    """
    keywords = detect_keywords(email_text, templates)
    if not keywords:
        return DetectionResult(keywords=[], matches=[])

    keyword_set = set(keywords)
    entries = []
    for template in templates:
        score = calculate_match_score(template, keyword_set)
        if score <= 0:
            continue
        matched = [
            trigger for trigger in template.triggers
            if normalize_trigger(trigger) in keyword_set
        ]
        entries.append(MatchEntry(template=template, score=score, matched_triggers=matched))

    matches = sorted(entries, key=lambda entry: entry.score, reverse=True)

    if matches:
        logger.debug(
            "Top match: '%s' score=%.2f (%d candidates)",
            matches[0].template.name, matches[0].score, len(matches),
        )
    return DetectionResult(keywords=keywords, matches=matches)
