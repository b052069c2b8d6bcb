import logging
from typing import Iterable, List, Optional, TextIO

from .automaton import LambdaNFA
from .fixtures import build_sample_automaton
from .nfa_definition import is_valid_word, parse_int, parse_state_count

logger = logging.getLogger(__name__)

PROMPT = 'nfa> '

HELP_TEXT = (
    "Lambda nondeterministic finite automaton.\n"
    "Accepted commands: \n"
    "INITIALIZE <number>:  Initialize new automaton with the given number of states.\n"
    "ADD <number> <number> <character>: Enter a transition.\n"
    "CHECK <\"word\">:  Check if the given word in language.\n"
    "PREFIX <\"word\">:  Computes the longest prefix in the given word.\n"
    "DISPLAY:         Show the automaton as sorted List of transitions.\n"
    "GENERATE:        Generate a hard coded automaton.\n"
    "QUIT:            Exit the program.\n"
)


class NFAShell:
    """
    Line oriented command interpreter around a single LambdaNFA.

    Commands are recognised by the first letter of the first token, case
    insensitive. Results go to stdout, errors to stderr as "Error! <message>".
    """

    def __init__(self, stdout: TextIO, stderr: TextIO):
        self.stdout = stdout
        self.stderr = stderr
        self.automaton: Optional[LambdaNFA] = None
        self._commands = {
            'I': self._initialize,
            'A': self._add_transition,
            'C': self._check_word,
            'P': self._longest_prefix,
            'D': self._display,
            'G': self._generate,
            'H': self._help,
        }

    def run(self, lines: Iterable[str]) -> None:
        """Executes lines until QUIT or until the lines run out."""
        for line in lines:
            if not self.execute(line):
                break

    def execute(self, line: str) -> bool:
        """
        Executes a single command line.

        Returns:
            False if the command was QUIT, True otherwise
        """
        tokens = line.split()
        if not tokens:
            self._error("Empty Input.")
            return True

        command = tokens[0][0].upper()
        if command == 'Q':
            return False

        handler = self._commands.get(command)
        if handler is None:
            self._error("Unknown command.")
        else:
            handler(tokens)
        return True

    def _initialize(self, tokens: List[str]) -> None:
        if len(tokens) < 2:
            self._error("Wrong number of arguments.")
            return

        try:
            num_states = parse_state_count(tokens[1])
        except ValueError as e:
            self._error(str(e))
            return

        self.automaton = LambdaNFA(num_states)
        logger.info("Initialized automaton with %d states", num_states)

    def _add_transition(self, tokens: List[str]) -> None:
        if self.automaton is None:
            self._error("No automaton.")
            return
        if len(tokens) < 4:
            self._error("Two numbers and one character expected.")
            return
        if len(tokens[3]) != 1:
            self._error("Unacceptable symbol.")
            return

        try:
            source = parse_int(tokens[1])
            target = parse_int(tokens[2])
        except ValueError:
            self._error("Could not parse number.")
            return

        symbol = tokens[3]
        if self.automaton.is_valid_transition(source, target, symbol):
            self.automaton.add_transition(source, target, symbol)
        else:
            self._error("Unacceptable transition.")

    def _check_word(self, tokens: List[str]) -> None:
        word = self._query_word(tokens, "Word must be surrounded with double quotation.")
        if word is None:
            return

        if self.automaton.is_element(word):
            self._print("In language.")
        else:
            self._print("Not in language.")

    def _longest_prefix(self, tokens: List[str]) -> None:
        word = self._query_word(tokens, "Word must be surrounded by double quotation.")
        if word is None:
            return

        prefix = self.automaton.longest_prefix(word)
        if prefix is None:
            self._print("No prefix in language.")
        else:
            self._print(f'"{prefix}"')

    def _query_word(self, tokens: List[str], form_error: str) -> Optional[str]:
        """Extracts the quoted word argument, reporting errors on the way."""
        if self.automaton is None:
            self._error("No automaton.")
            return None
        if len(tokens) < 2:
            self._error("Wrong number of arguments.")
            return None

        quoted = tokens[1]
        if len(quoted) < 2 or not (quoted.startswith('"') and quoted.endswith('"')):
            self._error(form_error)
            return None

        word = quoted[1:-1]
        if not is_valid_word(word):
            self._error("Word contains illegal characters.")
            return None
        return word

    def _display(self, tokens: List[str]) -> None:
        if self.automaton is None:
            self._error("No automaton")
            return
        listing = self.automaton.render()
        if listing:
            self.stdout.write(listing)

    def _generate(self, tokens: List[str]) -> None:
        self.automaton = build_sample_automaton()

    def _help(self, tokens: List[str]) -> None:
        self.stdout.write(HELP_TEXT)

    def _print(self, message: str) -> None:
        self.stdout.write(message + '\n')

    def _error(self, message: str) -> None:
        self.stderr.write(f"Error! {message}\n")
