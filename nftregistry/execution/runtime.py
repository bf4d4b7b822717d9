from nftregistry.execution.events import EventLog


def empty_state():
    return {
        'this': None,
        'caller': None,
        'owner': None,
        'signer': None
    }


class Context:
    def __init__(self, base_state=None):
        self._base_state = base_state or empty_state()

    def _get_state(self):
        return self._base_state

    def _reset(self):
        self._base_state = empty_state()

    @property
    def this(self):
        return self._get_state()['this']

    @property
    def caller(self):
        return self._get_state()['caller']

    @property
    def signer(self):
        return self._get_state()['signer']

    @property
    def owner(self):
        return self._get_state()['owner']


class Runtime:
    def __init__(self):
        self.context = Context()
        self.events = EventLog()

    def set_up(self, sender, contract, owner=None):
        self.context._base_state = {
            'signer': sender,
            'caller': sender,
            'this': contract,
            'owner': owner
        }

    def clean_up(self):
        self.context._reset()
