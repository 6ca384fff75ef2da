"""Classify the user's reply to a confirmation summary."""

import re
from enum import Enum
from typing import List, Tuple


class ReplyKind(str, Enum):
    AFFIRMATIVE = "affirmative"
    CHANGE = "change"
    OTHER = "other"


AFFIRMATIVE_PHRASES: Tuple[Tuple[str, ...], ...] = tuple(
    tuple(phrase.split())
    for phrase in (
        "yes",
        "yeah",
        "yea",
        "yep",
        "yup",
        "ya",
        "confirm",
        "confirmed",
        "i confirm",
        "looks good",
        "look good",
        "looks great",
        "looks right",
        "looks correct",
        "sounds good",
        "sounds great",
        "perfect",
        "great",
        "correct",
        "that's correct",
        "that's right",
        "all good",
        "do it",
        "go ahead",
        "go for it",
        "proceed",
        "please proceed",
        "sure",
        "sure thing",
        "ok",
        "okay",
        "k",
        "absolutely",
    )
)

# Any of these turns the reply into a change request, even after a "yes".
CHANGE_MARKERS = frozenset(
    {
        "no",
        "nope",
        "nah",
        "not",
        "don't",
        "dont",
        "cancel",
        "wait",
        "stop",
        "hold",
        "change",
        "actually",
        "but",
        "instead",
        "wrong",
        "edit",
        "fix",
    }
)

FILLER_WORDS = frozenset(
    {"please", "pls", "plz", "thanks", "thank", "you", "thx", "now", "it", "that", "all", "then", "to", "me"}
)

POSITIVE_EMOJI = ("👍", "✅", "👌")

_NON_WORD = re.compile(r"[^a-z0-9' ]+")


def _tokens(text: str) -> List[str]:
    normalized = text.lower().replace("’", "'")
    return _NON_WORD.sub(" ", normalized).split()


def classify_reply(text: str) -> ReplyKind:
    """Decide whether a user turn confirms the presented summary.

    A reply is affirmative when it consists only of recognised confirmation
    phrases ("yes", "looks good", "go ahead", ...) plus politeness filler.
    Any negation or change marker makes it a change request.

    Args:
        text: The user's utterance.

    Returns:
        The reply kind.
    """
    tokens = _tokens(text)
    if any(token in CHANGE_MARKERS for token in tokens):
        return ReplyKind.CHANGE

    if not tokens:
        stripped = text.strip()
        if stripped and all(ch in "".join(POSITIVE_EMOJI) or ch.isspace() or ch in "!." for ch in stripped):
            return ReplyKind.AFFIRMATIVE
        return ReplyKind.OTHER

    matched = False
    position = 0
    while position < len(tokens):
        phrase = _match_phrase(tokens, position)
        if phrase:
            matched = True
            position += len(phrase)
        elif tokens[position] in FILLER_WORDS:
            position += 1
        else:
            return ReplyKind.OTHER

    return ReplyKind.AFFIRMATIVE if matched else ReplyKind.OTHER


def _match_phrase(tokens: List[str], position: int) -> Tuple[str, ...]:
    best: Tuple[str, ...] = ()
    for phrase in AFFIRMATIVE_PHRASES:
        if tuple(tokens[position : position + len(phrase)]) == phrase and len(phrase) > len(best):
            best = phrase
    return best
