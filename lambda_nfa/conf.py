from django.conf import settings

DEFAULTS = {
    'MAX_STATES': 1000,
    'MAX_WORD_LENGTH': 10000,
}


def get_setting(name: str):
    """
    Reads one key of the LAMBDA_NFA settings dict, falling back to DEFAULTS.

    Raises:
        KeyError: If name is not a known setting
    """
    if name not in DEFAULTS:
        raise KeyError(f"Unknown LAMBDA_NFA setting: {name}")
    return getattr(settings, 'LAMBDA_NFA', {}).get(name, DEFAULTS[name])
