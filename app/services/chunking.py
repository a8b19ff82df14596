"""Split long text into pieces small enough for translation providers."""
import re

# MyMemory rejects queries over 500 chars, keep a margin for encoding
DEFAULT_CHUNK_SIZE = 400

_SENTENCE_RE = re.compile(r'[^.!?]+[.!?]*|[.!?]+')
_TERMINATORS = ('.', '!', '?')


def _with_period(text: str) -> str:
    return text if text.endswith(_TERMINATORS) else text + '.'


def split_sentences(text: str) -> list:
    """Split text into trimmed sentences, each keeping its own punctuation."""
    sentences = []
    for match in _SENTENCE_RE.findall(text):
        sentence = match.strip()
        if sentence:
            sentences.append(sentence)
    return sentences


def _split_words(sentence: str, max_length: int) -> list:
    """Greedily pack the words of an over-long sentence into groups."""
    # The last group may become a chunk of its own and get a period
    limit = max_length if sentence.endswith(_TERMINATORS) else max_length - 1
    groups = []
    group = ''
    for word in sentence.split():
        if not group:
            group = word
        elif len(group) + len(word) + 1 <= limit:
            group = f'{group} {word}'
        else:
            groups.append(group)
            group = word
    if group:
        groups.append(group)
    return groups


def chunk_text(text: str, max_length: int = DEFAULT_CHUNK_SIZE) -> list:
    """
    Split text into chunks of at most ``max_length`` characters.

    Text that already fits is returned as a single chunk, untouched.
    Longer text is split on sentence boundaries (``.``, ``!``, ``?``) and
    sentences are packed greedily into chunks. A sentence that is too long
    on its own is split on whitespace. A single word longer than
    ``max_length`` ends up in a chunk of its own, which is the only case
    where a chunk can exceed the limit.

    Args:
        text: Text to split
        max_length: Maximum chunk length

    Returns:
        List of chunks in original order
    """
    if len(text) <= max_length:
        return [text]

    chunks = []
    buffer = ''

    for sentence in split_sentences(text):
        # Joined length is len(buffer) + len(sentence) + 1, plus a period if missing
        if buffer and len(_with_period(f'{buffer} {sentence}')) <= max_length:
            buffer = f'{buffer} {sentence}'
            continue

        if buffer:
            chunks.append(_with_period(buffer))
            buffer = ''

        if len(_with_period(sentence)) <= max_length:
            buffer = sentence
        else:
            groups = _split_words(sentence, max_length)
            chunks.extend(groups[:-1])
            buffer = groups[-1]

    if buffer:
        chunks.append(_with_period(buffer))

    return chunks
