from ..client import RegistryClient
from ..contracts import CONTRACT_TYPES
from ..contracts.access import methods_of, is_view
from ..exceptions import RegistryError, ContractNotFound, MethodNotFound

client = RegistryClient()

NO_CONTRACT = 1
NO_VARIABLE = 2


def error_payload(e: Exception):
    if isinstance(e, RegistryError):
        return {'error': str(e), 'code': e.code}
    return {'error': str(e), 'code': type(e).__name__}


def get_registries():
    return {
        'registries': client.get_contracts()
    }


def get_methods(contract: str):
    contract_type = client.raw_driver.get_contract(contract)

    if contract_type is None:
        return {
            'status': NO_CONTRACT
        }

    funcs = []
    for func_name, kwargs in methods_of(CONTRACT_TYPES[contract_type]):
        funcs.append({
            'name': func_name,
            'arguments': kwargs
        })

    return {
        'methods': funcs
    }


def get_var(contract: str, variable: str, key: str = None):
    if client.raw_driver.get_contract(contract) is None:
        return {
            'status': NO_CONTRACT
        }

    # Multihashes don't work here
    if key is None:
        response = client.raw_driver.get('{}.{}'.format(contract, variable))
    else:
        response = client.raw_driver.get('{}.{}:{}'.format(contract, variable, key))

    if response is None:
        return {
            'status': NO_VARIABLE
        }

    return {
        'value': response
    }


def run(transaction: dict):
    output = client.executor.execute(sender=transaction.get('sender'),
                                     contract_name=transaction.get('contract'),
                                     function_name=transaction.get('function'),
                                     kwargs=transaction.get('kwargs') or {})

    response = {
        'status_code': output['status_code'],
        'events': output['events']
    }

    if output['status_code'] == 0:
        response['result'] = output['result']
    else:
        response.update(error_payload(output['result']))

    return response


def run_all(transactions: list):
    return [run(tx) for tx in transactions]


def query(contract: str, function: str, kwargs: dict = None):
    contract_type = client.raw_driver.get_contract(contract)
    if contract_type is None:
        return dict(status_code=1, **error_payload(ContractNotFound(contract_name=contract)))

    if not is_view(getattr(CONTRACT_TYPES[contract_type], function, None)):
        return dict(status_code=1, **error_payload(MethodNotFound(contract_name=contract, function_name=function)))

    # Views never take a caller, so the sender is irrelevant
    return run({
        'sender': None,
        'contract': contract,
        'function': function,
        'kwargs': kwargs
    })


# String to callable map for strict RPC capabilities. Explicit for a reason!
command_map = {
    'get_registries': get_registries,
    'get_methods': get_methods,
    'get_var': get_var,
    'query': query,
    'run': run,
    'run_all': run_all,
}


# Single function call to map RPC command to an actual Python function. Allows the server to just call this.
def process_json_rpc_command(payload: dict):
    command = payload.get('command')
    arguments = payload.get('arguments')

    if command is None or arguments is None:
        return

    func = command_map.get(command)

    if func is None:
        return

    return func(**arguments)
