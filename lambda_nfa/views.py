import json
import logging

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from .automaton import FIRST_SYMBOL, LAMBDA, LAST_SYMBOL
from .fixtures import build_sample_automaton, sample_definition
from .nfa_definition import build_automaton, validate_nfa_definition, validate_word

logger = logging.getLogger(__name__)


def _load_nfa(request):
    """
    Parses the request body and builds the automaton it describes.

    Returns:
        (data, automaton, None) on success, or (None, None, JsonResponse) with
        the 400 response to send back
    """
    data = json.loads(request.body)
    if not isinstance(data, dict):
        return None, None, JsonResponse({'error': 'Request body must be a JSON object'}, status=400)

    definition = data.get('nfa')
    if not definition:
        return None, None, JsonResponse({'error': 'Missing NFA definition'}, status=400)

    # Validate NFA structure
    validation = validate_nfa_definition(definition)
    if not validation['valid']:
        return None, None, JsonResponse({'error': validation['error']}, status=400)

    return data, build_automaton(definition), None


def _load_word(data):
    word = data.get('word', '')
    validation = validate_word(word)
    if not validation['valid']:
        return None, JsonResponse({'error': validation['error']}, status=400)
    return word, None


def _server_error(e):
    logger.exception("Unhandled error while processing NFA request")
    return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def check_word(request):
    """
    Django view deciding whether a word is in the language of an NFA.

    Expects a POST request with a JSON body containing:
    - nfa: The NFA definition
    - word: The word to check

    Returns a JSON response with the membership result.
    """
    try:
        data, automaton, error = _load_nfa(request)
        if error:
            return error

        word, error = _load_word(data)
        if error:
            return error

        return JsonResponse({
            'word': word,
            'in_language': automaton.is_element(word)
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        return _server_error(e)


@csrf_exempt
@require_POST
def longest_prefix(request):
    """
    Django view computing the longest prefix of a word accepted by an NFA.

    Expects a POST request with a JSON body containing:
    - nfa: The NFA definition
    - word: The word whose prefixes are checked

    The prefix is null when not even the empty word is accepted.
    """
    try:
        data, automaton, error = _load_nfa(request)
        if error:
            return error

        word, error = _load_word(data)
        if error:
            return error

        prefix = automaton.longest_prefix(word)
        return JsonResponse({
            'word': word,
            'longest_prefix': prefix,
            'has_prefix': prefix is not None
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        return _server_error(e)


@csrf_exempt
@require_POST
def display(request):
    """
    Django view listing all transitions of an NFA, sorted by source and then
    by target state.
    """
    try:
        data, automaton, error = _load_nfa(request)
        if error:
            return error

        return JsonResponse({
            'listing': automaton.render(),
            'transitions': [list(t) for t in automaton.transitions()]
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        return _server_error(e)


@csrf_exempt
@require_POST
def validate_transition(request):
    """
    Django view checking whether a transition could be added to an NFA.

    Expects a POST request with a JSON body containing:
    - nfa: The NFA definition
    - source, target: State ids
    - symbol: Alphabet symbol or the lambda symbol
    """
    try:
        data, automaton, error = _load_nfa(request)
        if error:
            return error

        for key in ('source', 'target', 'symbol'):
            if key not in data:
                return JsonResponse({'error': f'Missing required key: {key}'}, status=400)

        return JsonResponse({
            'valid': automaton.is_valid_transition(data['source'], data['target'], data['symbol'])
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        return _server_error(e)


@csrf_exempt
@require_POST
def epsilon_closures(request):
    """
    Django view returning the lambda closure of every state of an NFA.

    A state is never listed in its own closure.
    """
    try:
        data, automaton, error = _load_nfa(request)
        if error:
            return error

        closures = automaton.epsilon_closures()
        return JsonResponse({
            'closures': {str(state_id): reached for state_id, reached in closures.items()}
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        return _server_error(e)


@require_GET
def fixture(request):
    """Django view returning the hard coded sample NFA."""
    return JsonResponse({
        'nfa': sample_definition(),
        'listing': build_sample_automaton().render()
    })


@require_GET
def alphabet(request):
    return JsonResponse({
        'first_symbol': FIRST_SYMBOL,
        'last_symbol': LAST_SYMBOL,
        'lambda_symbol': LAMBDA
    })
