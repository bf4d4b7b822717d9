import os

DB_URL = os.getenv('DB_URL', 'localhost')
DB_PORT = int(os.getenv('DB_PORT', 27017))
DB_NAME = os.getenv('DB_NAME', 'nftregistry')
DB_COLLECTION = os.getenv('DB_COLLECTION', 'state')

DELIMITER = ':'
INDEX_SEPARATOR = '.'

TYPE_KEY = '__type__'
OWNER_KEY = '__owner__'
TIME_KEY = '__submitted__'

PRIVATE_METHOD_PREFIX = '_'

MAX_HASH_DIMENSIONS = 16
MAX_KEY_SIZE = 1024

# Accepted on input as "no account". None is what storage and events carry.
NULL_ACCOUNTS = (None, '')

# Accounts become hash key components, so they are kept well under MAX_KEY_SIZE
MAX_ACCOUNT_SIZE = 256
MAX_TOKEN_ID = 2 ** 256 - 1

REGISTRY_TYPE = 'AssetRegistry'

WEB_SERVER_PORT = int(os.getenv('WEB_SERVER_PORT', 8080))
NUM_WORKERS = 1
