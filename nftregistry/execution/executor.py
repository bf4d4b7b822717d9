from nftregistry.execution.runtime import Runtime
from nftregistry.db.driver import ContractDriver
from nftregistry.contracts import CONTRACT_TYPES
from nftregistry.contracts.access import access_of, is_view, takes_caller, EXPORT, INTERNAL
from nftregistry.exceptions import ContractNotFound, MethodNotFound, PrivateMethod, NotContractOwner
from nftregistry.logger import get_logger
from nftregistry import config
from copy import deepcopy
from collections.abc import Iterator
import traceback

log = get_logger('Executor')


class Executor:
    def __init__(self, driver=None, bypass_privates=False):
        self.driver = driver

        if not self.driver:
            self.driver = ContractDriver()

        self.bypass_privates = bypass_privates

        self.runtime = Runtime()

    @property
    def context(self):
        return self.runtime.context

    @property
    def events(self):
        return self.runtime.events

    def load(self, contract_name):
        if not isinstance(contract_name, str):
            raise ContractNotFound(contract_name=contract_name)

        contract_type = self.driver.get_contract(contract_name)

        cls = CONTRACT_TYPES.get(contract_type)
        if cls is None:
            raise ContractNotFound(contract_name=contract_name)

        return cls(contract_name, self.driver, events=self.runtime.events)

    def resolve(self, contract, function_name):
        if not isinstance(function_name, str):
            raise MethodNotFound(contract_name=contract.contract, function_name=function_name)

        func = getattr(contract, function_name, None)
        access = access_of(func)

        if function_name.startswith(config.PRIVATE_METHOD_PREFIX):
            if not self.bypass_privates:
                raise PrivateMethod(function_name=function_name)
            if access != INTERNAL:
                raise MethodNotFound(contract_name=contract.contract, function_name=function_name)
        elif access != EXPORT:
            raise MethodNotFound(contract_name=contract.contract, function_name=function_name)

        return func

    def execute(self, sender, contract_name, function_name, kwargs, auto_commit=True) -> dict:
        driver = self.driver

        savepoint = driver.savepoint()
        pending_events = len(self.runtime.events.pending)

        try:
            status_code = 0

            contract = self.load(contract_name)

            self.runtime.set_up(sender=sender, contract=contract_name, owner=driver.get_owner(contract_name))

            func = self.resolve(contract, function_name)

            # Owned registries only accept calls from their owner. Views stay readable by anyone
            if not is_view(func) and self.context.owner is not None and self.context.owner != self.context.caller:
                raise NotContractOwner(caller=self.context.caller, owner=self.context.owner)

            kwargs = dict(kwargs)
            if takes_caller(func):
                # Caller identity always comes from the context, never from the arguments
                kwargs['caller'] = self.context.caller

            result = func(**kwargs)

            if isinstance(result, Iterator):
                result = list(result)

            writes = deepcopy(driver.pending_writes)
            events = [e.to_dict() for e in self.runtime.events.pending[pending_events:]]

            if auto_commit:
                driver.commit()
                self.runtime.events.commit()
        except Exception as e:
            result = e
            status_code = 1
            writes = {}
            events = []

            log.error(str(e))
            log.error(traceback.format_exc())

            # Nothing a failed call wrote or emitted may survive it
            driver.rollback(savepoint)
            self.runtime.events.rollback(keep=pending_events)

        self.runtime.clean_up()

        output = {
            'status_code': status_code,
            'result': result,
            'writes': writes,
            'events': events,
        }

        return output
