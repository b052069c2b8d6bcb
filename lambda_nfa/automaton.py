import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, Iterator, List, NamedTuple, Optional, Tuple, Union

from .listing import format_listing

logger = logging.getLogger(__name__)

# Ordinary alphabet is the inclusive range FIRST_SYMBOL..LAST_SYMBOL
FIRST_SYMBOL = 'a'
LAST_SYMBOL = 'z'

# Reserved symbol for lambda (epsilon) transitions
LAMBDA = '~'


def is_alphabet_symbol(symbol) -> bool:
    """True if symbol is a single character of the ordinary alphabet."""
    return (
        isinstance(symbol, str)
        and len(symbol) == 1
        and FIRST_SYMBOL <= symbol <= LAST_SYMBOL
    )


def is_transition_symbol(symbol) -> bool:
    """True if symbol may label a transition (alphabet symbol or lambda)."""
    return is_alphabet_symbol(symbol) or symbol == LAMBDA


class Transition(NamedTuple):
    """Immutable edge between two states, identified by their ids"""
    source: int
    target: int
    symbol: str

    def __str__(self):
        return f"({self.source}, {self.target}) {self.symbol}"


class State:
    """
    A single automaton state.

    Outgoing transitions are bucketed per symbol (lambda included), and also
    kept in one list in insertion order for listing. Other states are resolved
    through the shared ``arena`` list owned by the automaton, where the state
    with id ``i`` sits at index ``i - 1``. The optional ``closure_version``
    callable reports the owner's lambda edge count; a cached closure computed
    under an older count is recomputed.
    """

    def __init__(self, state_id: int, arena: List['State'],
                 closure_version: Optional[Callable[[], int]] = None):
        self.id = state_id
        self._arena = arena
        self._closure_version = closure_version or (lambda: 0)
        self._cached_version = 0
        self._by_symbol: Dict[str, List[Transition]] = {}
        self._outgoing: List[Transition] = []
        self._closure: Optional[Tuple['State', ...]] = None

    def insert(self, transition: Transition) -> None:
        """
        Stores an outgoing transition under its symbol.

        No validation happens here. Duplicates and self loops are kept as is.
        Cached closures of this or any other state are not touched, so callers
        mutating a queried graph must drop them through ``invalidate_closure``.
        """
        self._by_symbol.setdefault(transition.symbol, []).append(transition)
        self._outgoing.append(transition)

    def targets_for(self, symbol: str) -> List['State']:
        """
        States reachable by exactly one transition labelled ``symbol``.

        Args:
            symbol: An alphabet symbol or LAMBDA

        Returns:
            Target states in insertion order, empty if there are none
        """
        return [self._arena[t.target - 1] for t in self._by_symbol.get(symbol, [])]

    def epsilon_closure(self) -> Tuple['State', ...]:
        """
        States reachable from this one through one or more lambda transitions.

        The state itself is never part of its own closure, even when a lambda
        cycle leads back to it. Computed once by breadth-first search and
        cached until ``invalidate_closure`` is called or the owning automaton
        gains a lambda transition.

        Returns:
            Each reachable state exactly once, in BFS discovery order
        """
        version = self._closure_version()
        if self._closure is None or self._cached_version != version:
            self._closure = self._compute_closure()
            self._cached_version = version
        return self._closure

    def invalidate_closure(self) -> None:
        self._closure = None

    def _compute_closure(self) -> Tuple['State', ...]:
        closure = []
        visited = {self.id}
        queue = deque([self])

        while queue:
            current = queue.popleft()
            for target in current.targets_for(LAMBDA):
                if target.id not in visited:
                    visited.add(target.id)
                    closure.append(target)
                    queue.append(target)

        return tuple(closure)

    def ordered_transitions(self) -> List[Transition]:
        """
        All outgoing transitions sorted by target id, ties kept in insertion order.

        Ties follow the order the transitions were added in, across symbols.
        Listings that group ties by symbol (lambda first, then a..z) order
        such ties differently, e.g. (1, 3) a added before (1, 3) ~ is listed
        in that order here.
        """
        return sorted(self._outgoing, key=lambda t: t.target)

    def __repr__(self):
        return f"State({self.id})"

    def __str__(self):
        return str(self.id)


@dataclass(frozen=True)
class Advance:
    """Queue entry that moves the input cursor one symbol forward"""


@dataclass(frozen=True)
class Visit:
    """Queue entry that explores one state at the current cursor"""
    state_id: int


QueueEntry = Union[Advance, Visit]


class LambdaNFA:
    """
    Nondeterministic finite automaton with lambda transitions.

    States are numbered 1..num_states and fixed at construction. State 1 is
    the start state and the state with the highest id is the only accepting
    state. Transitions can be appended but never removed.
    """

    def __init__(self, num_states: int):
        if num_states <= 0:
            raise ValueError("Only positive numbers accepted.")

        self._states: List[State] = []
        self._lambda_edges = 0
        for state_id in range(1, num_states + 1):
            self._states.append(State(state_id, self._states, self._closure_generation))

    def _closure_generation(self) -> int:
        return self._lambda_edges

    @property
    def num_states(self) -> int:
        return len(self._states)

    @property
    def states(self) -> Tuple[State, ...]:
        return tuple(self._states)

    @property
    def start_state(self) -> State:
        return self._states[0]

    @property
    def accepting_state(self) -> State:
        return self._states[-1]

    def state(self, state_id: int) -> State:
        """Returns the state with the given id (1-based)."""
        if not 1 <= state_id <= self.num_states:
            raise KeyError(f"No state with id {state_id}")
        return self._states[state_id - 1]

    def is_valid_transition(self, source: int, target: int, symbol: str) -> bool:
        """
        Checks if a transition can be part of this automaton.

        Args:
            source: Id of the source state
            target: Id of the target state
            symbol: Symbol to read, an alphabet symbol or LAMBDA

        Returns:
            True if and only if both ids name existing states and the symbol
            is in the alphabet or is LAMBDA
        """
        return (
            _is_state_id(source, self.num_states)
            and _is_state_id(target, self.num_states)
            and is_transition_symbol(symbol)
        )

    def add_transition(self, source: int, target: int, symbol: str) -> bool:
        """
        Adds a transition if it is valid, otherwise does nothing.

        Multitransitions (equal source, target and symbol) and self loops are
        allowed. Storing a lambda transition outdates every cached closure so
        that later queries see the new edge; other symbols leave them valid.

        Returns:
            True if the transition was stored, False if it was rejected
        """
        if not self.is_valid_transition(source, target, symbol):
            logger.debug("Ignoring invalid transition (%r, %r) %r", source, target, symbol)
            return False

        self._states[source - 1].insert(Transition(source, target, symbol))
        if symbol == LAMBDA:
            self._lambda_edges += 1
        return True

    def is_element(self, word: str) -> bool:
        """True if and only if the whole word is in the language of the automaton."""
        return self.longest_prefix(word) == word

    def longest_prefix(self, word: str) -> Optional[str]:
        """
        Computes the longest prefix of word that is in the language.

        A single FIFO queue carries Visit entries for the states active at the
        current cursor, separated by Advance entries that move the cursor one
        symbol forward. Cursor values therefore come out of the queue in
        nondecreasing order, and the last time the accepting state is visited
        marks the longest accepted prefix.

        Args:
            word: Word made of alphabet symbols

        Returns:
            The longest accepted prefix, or None if not even the empty word
            is accepted
        """
        accepting_id = self.accepting_state.id
        length = len(word)
        cursor = -1
        symbol = LAMBDA
        longest = None

        queue: Deque[QueueEntry] = deque([Advance()])
        # States already queued for the cursor value being filled
        queued = set()
        for state in (self.start_state,) + self.start_state.epsilon_closure():
            if state.id not in queued:
                queued.add(state.id)
                queue.append(Visit(state.id))

        while queue:
            entry = queue.popleft()

            if isinstance(entry, Advance):
                cursor += 1
                queued = set()
                if cursor < length:
                    queue.append(Advance())
                    symbol = word[cursor]
                continue

            if entry.state_id == accepting_id and 0 <= cursor <= length:
                longest = word[:cursor]

            if cursor < length:
                for target in self._states[entry.state_id - 1].targets_for(symbol):
                    for reached in (target,) + target.epsilon_closure():
                        if reached.id not in queued:
                            queued.add(reached.id)
                            queue.append(Visit(reached.id))

        return longest

    def transitions(self) -> Iterator[Transition]:
        """All transitions, states in id order, each sorted by target id."""
        for state in self._states:
            yield from state.ordered_transitions()

    def epsilon_closures(self) -> Dict[int, List[int]]:
        """Lambda closure of every state as lists of state ids."""
        return {
            state.id: [reached.id for reached in state.epsilon_closure()]
            for state in self._states
        }

    def render(self) -> str:
        """
        Returns the automaton as a sorted list of transitions.

        One transition per line in the form ``(source, target) symbol``.
        """
        return format_listing(self.transitions())

    def __str__(self):
        return self.render()

    def __repr__(self):
        return f"LambdaNFA(num_states={self.num_states})"


def _is_state_id(value, num_states: int) -> bool:
    # bool is an int subclass but never a state id
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and 0 < value <= num_states
    )
