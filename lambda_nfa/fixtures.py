from typing import Dict

from .automaton import LAMBDA, LambdaNFA

# Five states, state 5 accepts. Loops on state 1 let any prefix be skipped.
SAMPLE_NFA = {
    'states': 5,
    'transitions': [
        [1, 1, 'a'],
        [1, 1, 'b'],
        [1, 2, LAMBDA],
        [2, 3, 'b'],
        [2, 4, 'a'],
        [3, 4, LAMBDA],
        [3, 5, LAMBDA],
        [4, 5, 'b'],
    ],
}


def sample_definition() -> Dict:
    """Returns a fresh copy of the sample definition."""
    return {
        'states': SAMPLE_NFA['states'],
        'transitions': [list(entry) for entry in SAMPLE_NFA['transitions']],
    }


def build_sample_automaton() -> LambdaNFA:
    automaton = LambdaNFA(SAMPLE_NFA['states'])
    for source, target, symbol in SAMPLE_NFA['transitions']:
        automaton.add_transition(source, target, symbol)
    return automaton
