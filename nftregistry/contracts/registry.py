"""
Non-fungible asset registry.

Tracks one owner per integer token id, per token approvals, per owner operator approvals
and a per owner listing of held ids. Every mutating operation checks all of its
preconditions before its first write, so a rejected call leaves state untouched.
"""
from nftregistry.contracts.access import export, internal, view
from nftregistry.contracts.enumeration import OwnedIndex
from nftregistry.contracts.state import RegistryState
from nftregistry.execution.events import EventLog
from nftregistry.exceptions import (
    AlreadyMinted,
    InvalidAccount,
    NotFound,
    OwnerMismatch,
    SelfApproval,
    Unauthorized,
    ZeroAddress,
)
from nftregistry.logger import get_logger
from nftregistry import config

TRANSFER = 'Transfer'
APPROVAL = 'Approval'
APPROVAL_FOR_ALL = 'ApprovalForAll'

log = get_logger('Registry')


def is_null(account):
    return account in config.NULL_ACCOUNTS


def is_valid_account(account):
    return isinstance(account, str) \
        and config.DELIMITER not in account \
        and config.INDEX_SEPARATOR not in account \
        and len(account) <= config.MAX_ACCOUNT_SIZE


def is_token_id(token_id):
    return isinstance(token_id, int) and not isinstance(token_id, bool) and 0 < token_id <= config.MAX_TOKEN_ID


def _account(account):
    return None if is_null(account) else account


def _require_valid(account):
    if not is_valid_account(account):
        raise InvalidAccount(account=account)


class AssetRegistry:
    def __init__(self, name, driver, events: EventLog = None):
        self.contract = name
        self.state = RegistryState(name, driver)
        self.index = OwnedIndex(self.state)
        self.events = events if events is not None else EventLog()

    def construct(self, token_name, token_symbol):
        self.state.name.set(token_name)
        self.state.symbol.set(token_symbol)

    # Queries

    @view
    def get_name(self):
        return self.state.name.get()

    @view
    def get_symbol(self):
        return self.state.symbol.get()

    @view
    def get_token_uri(self, token_id):
        self._require_minted(token_id)
        return self.state.token_uri[token_id]

    @view
    def balance_of(self, account):
        if is_null(account):
            raise InvalidAccount(account=None)
        _require_valid(account)
        return self.state.balances[account]

    @view
    def owner_of(self, token_id):
        # Ids that are not ints can never have been minted
        if not is_token_id(token_id):
            return None
        return self.state.owners[token_id]

    @view
    def get_approved(self, token_id):
        self._require_minted(token_id)
        return self.state.token_approvals[token_id]

    @view
    def is_approved_for_all(self, owner, operator):
        if not (is_valid_account(owner) and is_valid_account(operator)):
            return False
        return self.state.operator_approvals[owner, operator]

    @view
    def get_total_minted(self):
        return self.state.counter.get()

    @view
    def get_token_ids_of(self, account):
        if is_null(account):
            return iter(())
        _require_valid(account)
        return self.index.ids(account)

    # Mutations

    @export
    def mint(self, to):
        if is_null(to):
            raise ZeroAddress(action='mint to')
        _require_valid(to)

        new_id = self.state.counter.get() + 1

        if self.state.owners[new_id] is not None:
            raise AlreadyMinted(token_id=new_id)

        # A new token starts with no approval whatever storage held for its id
        del self.state.token_approvals[new_id]

        self.state.balances[to] += 1
        self.state.owners[new_id] = to
        self.state.counter.set(new_id)

        self.index.add(to, new_id)

        self._emit(TRANSFER, {'from': None, 'to': to, 'id': new_id})
        log.info('Minted token {} of {} to {}'.format(new_id, self.contract, to))

        return new_id

    @export
    def approve(self, caller, to, token_id):
        to = _account(to)
        if to is not None:
            _require_valid(to)

        owner = self.owner_of(token_id)

        if to == owner:
            raise SelfApproval(account=to)

        if owner is None or is_null(caller) or (caller != owner and not self.is_approved_for_all(owner, caller)):
            raise Unauthorized(caller=caller, token_id=token_id)

        self.state.token_approvals[token_id] = to

        self._emit(APPROVAL, {'owner': owner, 'to': to, 'id': token_id})
        log.debug('{} approved {} for token {} of {}'.format(owner, to, token_id, self.contract))

    @export
    def set_operator_approval(self, caller, operator, approved):
        if is_null(caller):
            raise Unauthorized(caller=caller, token_id='any')
        _require_valid(caller)

        if operator == caller:
            raise SelfApproval(account=caller)

        if is_null(operator):
            raise ZeroAddress(action='approve')
        _require_valid(operator)

        approved = bool(approved)
        self.state.operator_approvals[caller, operator] = approved

        self._emit(APPROVAL_FOR_ALL, {'owner': caller, 'operator': operator, 'approved': approved})
        log.debug('{} set operator {} to {} on {}'.format(caller, operator, approved, self.contract))

    @export
    def transfer(self, caller, sender, to, token_id):
        if not self._is_approved_or_owner(caller, token_id):
            raise Unauthorized(caller=caller, token_id=token_id)

        self._transfer(sender, to, token_id)

    def _transfer(self, sender, to, token_id):
        if sender != self.owner_of(token_id):
            raise OwnerMismatch(sender=sender, token_id=token_id)

        if is_null(to):
            raise ZeroAddress(action='transfer to')
        _require_valid(to)

        del self.state.token_approvals[token_id]

        self.state.balances[sender] -= 1
        self.state.balances[to] += 1

        self.state.owners[token_id] = to

        self.index.remove(sender, token_id)
        self.index.add(to, token_id)

        self._emit(TRANSFER, {'from': sender, 'to': to, 'id': token_id})
        log.info('Transferred token {} of {} from {} to {}'.format(token_id, self.contract, sender, to))

    @internal
    def _burn(self, token_id):
        owner = self.owner_of(token_id)
        if owner is None:
            raise NotFound(token_id=token_id)

        del self.state.token_approvals[token_id]

        self.state.balances[owner] -= 1
        self.state.owners[token_id] = None

        self.index.remove(owner, token_id)

        self._emit(TRANSFER, {'from': owner, 'to': None, 'id': token_id})
        log.info('Burned token {} of {}'.format(token_id, self.contract))

    @internal
    def _set_token_uri(self, token_id, uri):
        self._require_minted(token_id)
        self.state.token_uri[token_id] = uri

    # Helpers

    def _require_minted(self, token_id):
        if self.owner_of(token_id) is None:
            raise NotFound(token_id=token_id)

    def _is_approved_or_owner(self, caller, token_id):
        owner = self.owner_of(token_id)

        if owner is None or is_null(caller):
            return False

        return caller == owner \
            or self.state.token_approvals[token_id] == caller \
            or self.is_approved_for_all(owner, caller)

    def _emit(self, event, data):
        self.events.emit(self.contract, event, **data)
