from django.test import SimpleTestCase, override_settings
from lambda_nfa.automaton import LAMBDA
from lambda_nfa.conf import get_setting
from lambda_nfa.fixtures import SAMPLE_NFA, build_sample_automaton, sample_definition
from lambda_nfa.nfa_definition import (
    build_automaton,
    definition_transitions,
    is_valid_word,
    parse_int,
    parse_state_count,
    validate_nfa_definition,
    validate_word,
)


class TestParseStateCount(SimpleTestCase):
    def test_valid_counts(self):
        self.assertEqual(parse_state_count('5'), 5)
        self.assertEqual(parse_state_count('+7'), 7)
        self.assertEqual(parse_state_count(' 12 '), 12)
        self.assertEqual(parse_state_count(1), 1)

    def test_unparsable_counts(self):
        for token in ('five', '2.5', '', None, True, 2.5):
            with self.assertRaisesMessage(ValueError, 'Could not parse number.'):
                parse_state_count(token)

    def test_only_ascii_digits_are_numbers(self):
        for token in ('1_0', '\u0663', '\uff11', '1e3', '0x10', '--1'):
            with self.assertRaisesMessage(ValueError, 'Could not parse number.'):
                parse_int(token)
            with self.assertRaisesMessage(ValueError, 'Could not parse number.'):
                parse_state_count(token)

    def test_parse_int(self):
        self.assertEqual(parse_int('-12'), -12)
        self.assertEqual(parse_int('007'), 7)
        self.assertEqual(parse_int(4), 4)

    def test_non_positive_counts(self):
        for token in ('0', '-4', 0):
            with self.assertRaisesMessage(ValueError, 'Only positive numbers accepted.'):
                parse_state_count(token)


class TestValidateWord(SimpleTestCase):
    def test_valid_words(self):
        self.assertTrue(is_valid_word(''))
        self.assertTrue(is_valid_word('abcxyz'))
        self.assertEqual(validate_word('abba'), {'valid': True})

    def test_illegal_characters(self):
        for word in ('aB', 'a b', 'a~', '1', 'ä'):
            result = validate_word(word)
            self.assertFalse(result['valid'], word)
            self.assertEqual(result['error'], 'Word contains illegal characters.')

    def test_word_must_be_string(self):
        self.assertFalse(is_valid_word(None))
        self.assertFalse(validate_word(['a'])['valid'])

    @override_settings(LAMBDA_NFA={'MAX_WORD_LENGTH': 3})
    def test_word_length_limit(self):
        self.assertTrue(validate_word('abc')['valid'])
        result = validate_word('abcd')
        self.assertFalse(result['valid'])
        self.assertIn('at most 3', result['error'])


class TestValidateDefinition(SimpleTestCase):
    def test_sample_definition_is_valid(self):
        self.assertEqual(validate_nfa_definition(sample_definition()), {'valid': True})

    def test_minimal_definition(self):
        self.assertTrue(validate_nfa_definition({'states': 1})['valid'])

    def test_structure_errors(self):
        cases = [
            ([], 'NFA definition must be a dictionary'),
            ({}, 'Missing required key: states'),
            ({'states': '3'}, 'states must be an integer'),
            ({'states': True}, 'states must be an integer'),
            ({'states': 0}, 'Only positive numbers accepted.'),
            ({'states': 2, 'transitions': {}}, 'transitions must be a list'),
            ({'states': 2, 'transitions': [[1, 2]]}, 'Transition 0 must be [source, target, symbol]'),
            ({'states': 2, 'listing': 5}, 'listing must be a string'),
        ]
        for definition, error in cases:
            result = validate_nfa_definition(definition)
            self.assertFalse(result['valid'], definition)
            self.assertEqual(result['error'], error)

    def test_unacceptable_transitions(self):
        result = validate_nfa_definition({'states': 3, 'transitions': [[1, 2, 'a'], [1, 4, 'a']]})
        self.assertFalse(result['valid'])
        self.assertEqual(result['error'], 'Unacceptable transition: (1, 4) a')

        result = validate_nfa_definition({'states': 3, 'transitions': [[1, 2, '#']]})
        self.assertEqual(result['error'], 'Unacceptable transition: (1, 2) #')

        result = validate_nfa_definition({'states': 3, 'listing': '(0, 1) a\n'})
        self.assertEqual(result['error'], 'Unacceptable transition: (0, 1) a')

    def test_malformed_listing(self):
        result = validate_nfa_definition({'states': 3, 'listing': 'nonsense'})
        self.assertFalse(result['valid'])
        self.assertIn('Malformed transition line 1', result['error'])

    @override_settings(LAMBDA_NFA={'MAX_STATES': 4})
    def test_state_limit(self):
        self.assertEqual(get_setting('MAX_STATES'), 4)
        self.assertTrue(validate_nfa_definition({'states': 4})['valid'])
        result = validate_nfa_definition({'states': 5})
        self.assertFalse(result['valid'])
        self.assertIn('at most 4', result['error'])

    def test_unknown_setting(self):
        with self.assertRaises(KeyError):
            get_setting('NOT_A_SETTING')


class TestBuildAutomaton(SimpleTestCase):
    def test_build_from_transitions(self):
        automaton = build_automaton(sample_definition())
        self.assertEqual(automaton.num_states, SAMPLE_NFA['states'])
        self.assertEqual(automaton.render(), build_sample_automaton().render())

    def test_build_from_listing_and_transitions(self):
        definition = {
            'states': 3,
            'transitions': [[1, 2, 'a']],
            'listing': f"(2, 3) {LAMBDA}\n(1, 1) b\n",
        }
        self.assertEqual(definition_transitions(definition), [(1, 2, 'a'), (2, 3, LAMBDA), (1, 1, 'b')])

        automaton = build_automaton(definition)
        self.assertEqual(automaton.render(), "(1, 1) b\n(1, 2) a\n(2, 3) ~\n")
        self.assertTrue(automaton.is_element('ba'))

    def test_build_rejects_invalid_definition(self):
        with self.assertRaisesMessage(ValueError, 'Missing required key: states'):
            build_automaton({})
        with self.assertRaisesMessage(ValueError, 'Unacceptable transition'):
            build_automaton({'states': 1, 'transitions': [[1, 2, 'a']]})
