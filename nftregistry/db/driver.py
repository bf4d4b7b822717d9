from nftregistry.db.encoder import encode, decode
from nftregistry.logger import get_logger
from nftregistry import config
from datetime import datetime, timezone
import iso8601
import pymongo
import re

# DB maps strings to encoded strings
# Driver maps string to python object
TYPE_KEY = config.TYPE_KEY
OWNER_KEY = config.OWNER_KEY
TIME_KEY = config.TIME_KEY


class InMemDriver:
    def __init__(self):
        self.db = {}

    def get(self, item: str):
        return decode(self.db.get(item))

    def set(self, key: str, value):
        if value is None:
            self.__delitem__(key)
        else:
            self.db[key] = encode(value)

    def delete(self, key: str):
        self.__delitem__(key)

    def iter(self, prefix: str, length=0):
        l = []
        for k in sorted(self.db.keys()):
            if k.startswith(prefix):
                l.append(k)
            if 0 < length <= len(l):
                break

        return l

    def keys(self):
        return sorted(self.db.keys())

    def flush(self):
        self.db.clear()

    def __getitem__(self, item: str):
        value = self.get(item)
        if value is None:
            raise KeyError(item)
        return value

    def __setitem__(self, key: str, value):
        self.set(key, value)

    def __delitem__(self, key: str):
        self.db.pop(key, None)


class MongoDriver(InMemDriver):
    # conn_str see https://www.mongodb.com/docs/manual/reference/connection-string/
    def __init__(self, host=config.DB_URL, port=config.DB_PORT, db=config.DB_NAME,
                 collection=config.DB_COLLECTION, client=None):
        self.client = client or pymongo.MongoClient(host, port)
        self.db = self.client[db][collection]

    def get(self, item: str):
        v = self.db.find_one({'_id': item})
        if v is None:
            return None

        return decode(v['value'])

    def set(self, key: str, value):
        if value is None:
            self.__delitem__(key)
        else:
            self.db.update_one({'_id': key}, {'$set': {'value': encode(value)}}, upsert=True)

    def iter(self, prefix: str, length=0):
        cur = self.db.find({'_id': {'$regex': '^{}'.format(re.escape(prefix))}}, {'_id': 1})

        keys = sorted(entry['_id'] for entry in cur)

        return keys if length == 0 else keys[:length]

    def keys(self):
        return sorted(entry['_id'] for entry in self.db.find({}, {'_id': 1}))

    def flush(self):
        self.db.delete_many({})

    def __delitem__(self, key: str):
        self.db.delete_one({'_id': key})


class CacheDriver:
    def __init__(self, driver=None):
        self.pending_writes = {}
        self.pending_reads = {}
        self.driver = driver or InMemDriver()

    def find(self, key: str):
        # A pending None is a pending delete, so membership is checked instead of truthiness
        if key in self.pending_writes:
            return self.pending_writes[key]

        return self.driver.get(key)

    def get(self, key: str, save: bool = True):
        value = self.find(key)

        if save and key not in self.pending_reads:
            self.pending_reads[key] = value

        return value

    def set(self, key, value):
        if key not in self.pending_reads:
            self.get(key)

        self.pending_writes[key] = value

    def delete(self, key):
        self.set(key, None)

    def commit(self):
        for k, v in self.pending_writes.items():
            if v is None:
                self.driver.delete(k)
            else:
                self.driver.set(k, v)

        self.pending_writes.clear()
        self.pending_reads = {}

    def savepoint(self):
        return dict(self.pending_writes), dict(self.pending_reads)

    def rollback(self, savepoint=None):
        if savepoint is None:
            # Returns to disk state which should be whatever it was prior to any write sessions
            self.pending_reads = {}
            self.pending_writes.clear()
        else:
            writes, reads = savepoint
            self.pending_writes = dict(writes)
            self.pending_reads = dict(reads)

    def clear_pending_state(self):
        self.rollback()


class ContractDriver(CacheDriver):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.delimiter = config.INDEX_SEPARATOR
        self.log = get_logger('Driver')

    def items(self, prefix=''):
        # Get all of the items in the cache currently
        _items = {}
        keys = set()

        for k, v in self.pending_writes.items():
            if k.startswith(prefix):
                keys.add(k)
                if v is not None:
                    _items[k] = v

        # Get all of the keys we need
        db_keys = set(self.driver.iter(prefix=prefix))

        # Subtract the already gotten keys
        for k in db_keys - keys:
            _items[k] = self.get(k)

        return dict(sorted(_items.items()))

    def keys(self, prefix=''):
        return list(self.items(prefix).keys())

    def values(self, prefix=''):
        return list(self.items(prefix).values())

    def make_key(self, contract, variable, args=[]):
        contract_variable = self.delimiter.join((contract, variable))
        if args:
            return config.DELIMITER.join((contract_variable, *[str(arg) for arg in args]))
        return contract_variable

    def get_var(self, contract, variable, arguments=[]):
        key = self.make_key(contract, variable, arguments)
        return self.get(key)

    def set_var(self, contract, variable, arguments=[], value=None):
        key = self.make_key(contract, variable, arguments)
        self.set(key, value)

    def get_contract(self, name):
        return self.get_var(name, TYPE_KEY)

    def get_owner(self, name):
        owner = self.get_var(name, OWNER_KEY)
        if owner == '':
            owner = None
        return owner

    def get_time_submitted(self, name):
        submitted = self.get_var(name, TIME_KEY)
        if submitted is None:
            return None
        return iso8601.parse_date(submitted)

    def set_contract(self, name, contract_type, owner=None, timestamp=None):
        if self.get_contract(name) is not None:
            return False

        if timestamp is None:
            timestamp = datetime.now(timezone.utc)

        self.set_var(name, TYPE_KEY, value=contract_type)
        self.set_var(name, OWNER_KEY, value=owner)
        self.set_var(name, TIME_KEY, value=timestamp.isoformat())

        self.log.debug('Set contract {} of type {}'.format(name, contract_type))

        return True

    def get_contract_keys(self, name):
        return self.keys(name + self.delimiter)

    def get_contracts(self):
        suffix = self.delimiter + TYPE_KEY
        return [k[:-len(suffix)] for k in self.keys() if k.endswith(suffix)]

    def flush(self):
        self.driver.flush()
        self.clear_pending_state()
