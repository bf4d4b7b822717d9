from nftregistry.execution.executor import Executor
from nftregistry.db.driver import ContractDriver
from nftregistry.contracts import CONTRACT_TYPES
from nftregistry.contracts.access import methods_of
from nftregistry.exceptions import ContractExists
from functools import partial

from . import config

from .db.orm import Variable
from .db.orm import Hash


class AbstractRegistry:
    def __init__(self, name, signer, executor: Executor, funcs):
        self.name = name
        self.signer = signer
        self.executor = executor
        self.functions = funcs

        # set up virtual functions
        for f in funcs:
            func, kwargs = f

            # each function is a partial that allows kwarg overloading and overriding
            setattr(self, func, partial(self._abstract_function_call,
                                        signer=self.signer,
                                        contract_name=self.name,
                                        executor=self.executor,
                                        func=func))

    def keys(self):
        return self.executor.driver.get_contract_keys(self.name)

    # a variable contains a DOT, but no __, and no :
    # a hash contains a DOT, no __, and a :
    # a constant contains __, a DOT, and :

    def quick_read(self, variable, key=None, args=None):
        a = []

        if key is not None:
            a.append(key)

        if args is not None and isinstance(args, list):
            for arg in args:
                a.append(arg)

        k = self.executor.driver.make_key(contract=self.name, variable=variable, args=a)
        return self.executor.driver.get(k)

    def run_private_function(self, f, signer=None, **kwargs):
        signer = signer or self.signer

        # Let executor access private functions
        self.executor.bypass_privates = True

        # Append private method prefix to function name if it isn't there already
        if not f.startswith(config.PRIVATE_METHOD_PREFIX):
            f = '{}{}'.format(config.PRIVATE_METHOD_PREFIX, f)

        try:
            return self._abstract_function_call(signer=signer, executor=self.executor, contract_name=self.name,
                                                func=f, **kwargs)
        finally:
            # Set executor back to restricted mode
            self.executor.bypass_privates = False

    def __getattr__(self, item):
        # only reached when normal attribute lookup fails. full name is contract.item
        fullname = '{}.{}'.format(self.name, item)

        # if the raw name exists, it is a __protected__ or a variable, so prepare for those
        if fullname in self.keys():
            variable = Variable(contract=self.name, name=item, driver=self.executor.driver)

            # return just the value if it is __protected__ to prevent sets
            if item.startswith('__'):
                return variable.get()

            # otherwise, return the variable object with allows sets
            return variable

        # otherwise, see if contract.items: has more than one entry
        if len(self.executor.driver.values(prefix=self.name + '.' + item + ':')) > 0:

            # if so, it is a hash. return the hash object
            return Hash(contract=self.name, name=item, driver=self.executor.driver)

        # otherwise, the attribute does not exist, so throw the error.
        raise AttributeError('{} has no attribute {}'.format(self.name, item))

    def _abstract_function_call(self, signer, executor, contract_name, func, **kwargs):
        output = executor.execute(sender=signer,
                                  contract_name=contract_name,
                                  function_name=func,
                                  kwargs=kwargs)

        if output['status_code'] == 1:
            raise output['result']

        return output['result']


class RegistryClient:
    def __init__(self, signer='sys', driver=None):
        self.raw_driver = driver if driver is not None else ContractDriver()
        self.executor = Executor(driver=self.raw_driver)
        self.signer = signer

    @property
    def events(self):
        return self.executor.events

    def flush(self):
        self.raw_driver.flush()
        self.executor.events.flush()

    def deploy(self, name, token_name, token_symbol, owner=None, contract_type=config.REGISTRY_TYPE):
        assert name is not None, 'No name provided.'
        assert config.INDEX_SEPARATOR not in name and config.DELIMITER not in name, 'Illegal character in name.'

        if not self.raw_driver.set_contract(name=name, contract_type=contract_type, owner=owner):
            raise ContractExists(contract_name=name)

        registry = CONTRACT_TYPES[contract_type](name, self.raw_driver, events=self.executor.events)
        registry.construct(token_name=token_name, token_symbol=token_symbol)

        self.raw_driver.commit()

        return self.get_registry(name)

    # Returns abstract registry which has partial methods mapped to each exported function.
    def get_registry(self, name, signer=None):
        contract_type = self.raw_driver.get_contract(name)

        if contract_type is None:
            return None

        funcs = methods_of(CONTRACT_TYPES[contract_type])

        return AbstractRegistry(name=name,
                                signer=signer or self.signer,
                                executor=self.executor,
                                funcs=funcs)

    def get_contracts(self):
        return self.raw_driver.get_contracts()

    def get_var(self, contract, variable, arguments=[]):
        return self.raw_driver.get_var(contract, variable, arguments)

    def set_var(self, contract, variable, arguments=[], value=None):
        self.raw_driver.set_var(contract, variable, arguments, value)
        self.raw_driver.commit()
