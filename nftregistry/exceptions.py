class RegistryError(Exception):
    """
    The base exception for the registry. The fmt directive
    will be overloaded by the inheriting classes

    :ivar msg: The message associated with the error
    :ivar code: Stable name of the error kind, used by the wire surfaces
    """
    fmt = 'An unspecified error occurred'
    code = 'RegistryError'

    def __init__(self, **kwargs):
        msg = self.fmt.format(**kwargs)
        Exception.__init__(self, msg)
        self.kwargs = kwargs


class ZeroAddress(RegistryError):
    """
    A real account was required but the null account was given

    :ivar action: The operation that needed the account
    """
    fmt = 'Cannot {action} the zero address'
    code = 'ZeroAddress'


class NotFound(RegistryError):
    """
    Query against an asset id that was never minted or has been burned
    """
    fmt = 'Token {token_id} does not exist'
    code = 'NotFound'


class InvalidAccount(RegistryError):
    """
    Account is null where a real one is needed for a query, or cannot be
    used as a storage key component
    """
    fmt = 'Invalid account {account!r}'
    code = 'InvalidAccount'


class SelfApproval(RegistryError):
    """
    :ivar account: The account that tried to approve itself
    """
    fmt = 'Account {account} cannot approve itself'
    code = 'SelfApproval'


class Unauthorized(RegistryError):
    """
    Caller is neither the owner, an operator of the owner,
    nor the account approved for the token
    """
    fmt = 'Caller {caller} is not authorized for token {token_id}'
    code = 'Unauthorized'


class OwnerMismatch(RegistryError):
    fmt = 'Token {token_id} is not owned by {sender}'
    code = 'OwnerMismatch'


class AlreadyMinted(RegistryError):
    fmt = 'Token {token_id} has already been minted'
    code = 'AlreadyMinted'


class ContractExists(RegistryError):
    """
    When attempting to deploy a registry, found that a
    contract with the same name already exists

    :ivar contract_name: The name of the contract submitted.
    """
    fmt = "Contract with name '{contract_name}' already exists in the database"
    code = 'ContractExists'


class ContractNotFound(RegistryError):
    fmt = "Contract with name '{contract_name}' does not exist"
    code = 'ContractNotFound'


class MethodNotFound(RegistryError):
    fmt = "Contract '{contract_name}' has no exported method '{function_name}'"
    code = 'MethodNotFound'


class PrivateMethod(RegistryError):
    fmt = "Private method '{function_name}' not callable"
    code = 'PrivateMethod'


class NotContractOwner(RegistryError):
    fmt = 'Caller {caller} is not the owner {owner}!'
    code = 'NotContractOwner'


class IndexMismatch(RegistryError):
    """
    The per owner listing does not hold a token its owner record says it should
    """
    fmt = 'Token {token_id} is not indexed for {account}'
    code = 'IndexMismatch'
