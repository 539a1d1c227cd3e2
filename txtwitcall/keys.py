import json


OAUTH_KEY_RULES = {
    'consumer_key': True,
    'consumer_secret': True,
    'oauth_token': False,
    'oauth_token_secret': False,
}


def load_keys(*sources):
    """
    Load OAuth keys from JSON files or mappings.

    :param sources:
        Each source is either the path of a JSON file containing an object
        with some of the keys in ``OAUTH_KEY_RULES``, or a mapping with some
        of those keys. Later sources override earlier ones. Unrelated keys are
        ignored.

    :returns:
        A dict with every key in ``OAUTH_KEY_RULES``. Keys not found in any
        source are ``None``.
    """
    keys = dict((k, None) for k in OAUTH_KEY_RULES)
    for i, source in enumerate(sources, 1):
        if isinstance(source, str):
            with open(source, 'r') as kfile:
                source = json.load(kfile)
            if not isinstance(source, dict):
                raise ValueError(
                    "argument #%d: key file must contain a JSON object" % i)
        elif not hasattr(source, 'get'):
            raise TypeError("argument #%d: invalid type %s" % (
                i, type(source).__name__))
        for k in OAUTH_KEY_RULES:
            if source.get(k) is not None:
                keys[k] = source[k]
    return keys
