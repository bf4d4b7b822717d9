from nftregistry.logger import get_logger

log = get_logger('Events')


class LogEvent:
    def __init__(self, contract, event, data):
        self.contract = contract
        self.event = event
        self.data = data

    def to_dict(self):
        return {
            'contract': self.contract,
            'event': self.event,
            'data': dict(self.data)
        }

    def __eq__(self, other):
        if not isinstance(other, LogEvent):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return 'LogEvent({}, {}, {})'.format(self.contract, self.event, self.data)


class EventLog:
    """
    Buffers the events emitted by the call in flight. Like the pending writes of the driver,
    they only become visible to the history and to subscribers once the call commits.
    """
    def __init__(self):
        self.pending = []
        self.history = []
        self.subscribers = []

    def emit(self, contract, event, **data):
        self.pending.append(LogEvent(contract, event, data))

    def subscribe(self, callback):
        self.subscribers.append(callback)

    def unsubscribe(self, callback):
        self.subscribers.remove(callback)

    def commit(self):
        committed = self.pending
        self.pending = []

        for e in committed:
            self.history.append(e)
            for callback in self.subscribers:
                callback(e)

        return committed

    def rollback(self, keep=0):
        dropped = len(self.pending) - keep
        if dropped > 0:
            log.debug('Dropping {} pending events'.format(dropped))
        self.pending = self.pending[:keep]

    def flush(self):
        self.pending = []
        self.history = []
