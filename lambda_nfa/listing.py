import re
from typing import Iterable, List, Tuple

# One rendered transition, e.g. "(1, 2) a"
_TRANSITION_LINE = re.compile(r'^\(\s*(\d+)\s*,\s*(\d+)\s*\)\s*(\S)$')


def parse_listing(text: str) -> List[Tuple[int, int, str]]:
    """
    Parses a transition listing as produced by LambdaNFA.render().

    Blank lines are skipped. The triples are returned as written; checking
    them against an automaton is left to the caller.

    Args:
        text: Listing with one "(source, target) symbol" per line

    Returns:
        List of (source, target, symbol) tuples in listing order

    Raises:
        ValueError: If a non-blank line is not a transition
    """
    transitions = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped:
            continue

        match = _TRANSITION_LINE.match(stripped)
        if match is None:
            raise ValueError(f"Malformed transition line {line_number}: {stripped}")

        source, target, symbol = match.groups()
        transitions.append((int(source), int(target), symbol))

    return transitions


def format_listing(transitions: Iterable[Tuple[int, int, str]]) -> str:
    return ''.join(f"({source}, {target}) {symbol}\n" for source, target, symbol in transitions)
