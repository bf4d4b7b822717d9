import json

MONGO_MIN_INT = -(2 ** 63)
MONGO_MAX_INT = 2 ** 63 - 1

##
# Values are stored as compact JSON strings. Registries only store strings, ints and bools.
# Ints MongoDB cannot hold in 8 bytes are stored as a single key dict tagged __big_int__ and
# turned back into Python ints by as_object on the way out.
##


def encode_int(value: int):
    if MONGO_MIN_INT < value < MONGO_MAX_INT:
        return value

    return {
        '__big_int__': str(value)
    }


def encode(data):
    if isinstance(data, int) and not isinstance(data, bool):
        data = encode_int(data)

    return json.dumps(data, separators=(',', ':'))


def as_object(d):
    if '__big_int__' in d:
        return int(d['__big_int__'])
    return d


# Decode has a hook for JSON objects, which are just Python dictionaries. You have to specify the logic in this hook.
def decode(data):
    if data is None:
        return None

    if isinstance(data, bytes):
        data = data.decode()

    try:
        return json.loads(data, object_hook=as_object)
    except json.decoder.JSONDecodeError:
        return None
