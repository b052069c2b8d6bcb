import re
from typing import Dict, List, Tuple

from .automaton import FIRST_SYMBOL, LAST_SYMBOL, LambdaNFA
from .conf import get_setting
from .listing import parse_listing

WORD_PATTERN = re.compile(f"[{re.escape(FIRST_SYMBOL)}-{re.escape(LAST_SYMBOL)}]*")

# Optional sign and ASCII digits only, no underscores or other Unicode digits
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_int(token) -> int:
    """
    Parses a decimal integer typed by a client.

    Raises:
        ValueError: If the token is not an int or an optionally signed string
            of ASCII digits
    """
    if isinstance(token, int) and not isinstance(token, bool):
        return token
    if not isinstance(token, str) or INTEGER_PATTERN.fullmatch(token.strip()) is None:
        raise ValueError("Could not parse number.")
    return int(token)


def parse_state_count(token) -> int:
    """
    Parses the number of states requested for a new automaton.

    Raises:
        ValueError: If the token is not an integer or is not positive
    """
    num_states = parse_int(token)
    if num_states <= 0:
        raise ValueError("Only positive numbers accepted.")
    return num_states


def is_valid_word(word) -> bool:
    return isinstance(word, str) and WORD_PATTERN.fullmatch(word) is not None


def validate_word(word) -> Dict:
    """
    Validates a query word before it is handed to the automaton.

    Returns:
        Dict: Validation result with 'valid' boolean and optional 'error' message
    """
    if not isinstance(word, str):
        return {'valid': False, 'error': 'Word must be a string'}

    max_length = get_setting('MAX_WORD_LENGTH')
    if len(word) > max_length:
        return {'valid': False, 'error': f'Word too long: at most {max_length} symbols allowed'}

    if not is_valid_word(word):
        return {'valid': False, 'error': 'Word contains illegal characters.'}

    return {'valid': True}


def definition_transitions(definition: Dict) -> List[Tuple[int, int, str]]:
    """
    Collects the transitions of a definition, explicit triples first and then
    the ones from its listing text.

    Raises:
        ValueError: If the listing cannot be parsed
    """
    transitions = [tuple(entry) for entry in definition.get('transitions') or []]
    listing = definition.get('listing')
    if listing:
        transitions.extend(parse_listing(listing))
    return transitions


def validate_nfa_definition(definition) -> Dict:
    """
    Validates a client supplied automaton definition.

    Expected format:
        {
            'states': int,  # number of states, state 1 starts and the last accepts
            'transitions': [[source, target, symbol], ...],  # optional
            'listing': "(1, 2) a\\n..."  # optional, render() format
        }

    Returns:
        Dict: Validation result with 'valid' boolean and optional 'error' message
    """
    if not isinstance(definition, dict):
        return {'valid': False, 'error': 'NFA definition must be a dictionary'}

    if 'states' not in definition:
        return {'valid': False, 'error': 'Missing required key: states'}

    num_states = definition['states']
    if not isinstance(num_states, int) or isinstance(num_states, bool):
        return {'valid': False, 'error': 'states must be an integer'}

    if num_states <= 0:
        return {'valid': False, 'error': 'Only positive numbers accepted.'}

    max_states = get_setting('MAX_STATES')
    if num_states > max_states:
        return {'valid': False, 'error': f'Too many states: at most {max_states} allowed'}

    transitions = definition.get('transitions')
    if transitions is not None:
        if not isinstance(transitions, list):
            return {'valid': False, 'error': 'transitions must be a list'}

        for index, entry in enumerate(transitions):
            if not isinstance(entry, (list, tuple)) or len(entry) != 3:
                return {'valid': False, 'error': f'Transition {index} must be [source, target, symbol]'}

    listing = definition.get('listing')
    if listing is not None and not isinstance(listing, str):
        return {'valid': False, 'error': 'listing must be a string'}

    try:
        triples = definition_transitions(definition)
    except ValueError as e:
        return {'valid': False, 'error': str(e)}

    # Only the predicate is needed here, the automaton itself is thrown away
    checker = LambdaNFA(num_states)
    for source, target, symbol in triples:
        if not checker.is_valid_transition(source, target, symbol):
            return {'valid': False, 'error': f'Unacceptable transition: ({source}, {target}) {symbol}'}

    return {'valid': True}


def build_automaton(definition: Dict) -> LambdaNFA:
    """
    Builds an automaton from a definition.

    Raises:
        ValueError: If the definition does not pass validate_nfa_definition
    """
    validation = validate_nfa_definition(definition)
    if not validation['valid']:
        raise ValueError(validation['error'])

    automaton = LambdaNFA(definition['states'])
    for source, target, symbol in definition_transitions(definition):
        automaton.add_transition(source, target, symbol)
    return automaton
