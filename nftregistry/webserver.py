from sanic import Sanic
from sanic.response import json, text
from sanic_cors import CORS
from nftregistry.server import rpc
from nftregistry.server.rpc import client
from nftregistry.logger import get_logger
from nftregistry import config

app = Sanic('nftregistry')

ssl = None
CORS(app, automatic_options=True)

log = get_logger('Webserver')

ERROR_STATUS = {
    'NotFound': 404,
    'ContractNotFound': 404,
    'MethodNotFound': 404,
    'Unauthorized': 403,
    'NotContractOwner': 403,
    'PrivateMethod': 403,
}


def respond(output: dict):
    if output.get('status_code', 0) == 0:
        return json(output, status=200)

    return json(output, status=ERROR_STATUS.get(output.get('code'), 400))


def view(contract, function, **kwargs):
    return respond(rpc.query(contract, function, kwargs))


@app.route("/", methods=["GET",])
async def teapot(request):
    return text("I\'m a teapot", status=418)


# Returns {'registries': JSON List of strings}
@app.route('/registries', methods=['GET'])
async def get_registries(request):
    return json(rpc.get_registries())


@app.route('/registries/<name>', methods=['GET'])
async def get_registry(request, name):
    if client.raw_driver.get_contract(name) is None:
        return json({'error': '{} does not exist'.format(name), 'code': 'ContractNotFound'}, status=404)

    registry = client.get_registry(name)
    submitted = client.raw_driver.get_time_submitted(name)

    return json({
        'name': name,
        'token_name': registry.get_name(),
        'token_symbol': registry.get_symbol(),
        'total_minted': registry.get_total_minted(),
        'submitted': submitted.isoformat() if submitted is not None else None
    }, status=200)


@app.route('/registries/<name>/methods', methods=['GET'])
async def get_methods(request, name):
    response = rpc.get_methods(name)

    if response.get('status') == rpc.NO_CONTRACT:
        return json({'error': '{} does not exist'.format(name), 'code': 'ContractNotFound'}, status=404)

    return json(response, status=200)


@app.route('/registries/<name>/owner/<token_id:int>', methods=['GET'])
async def owner_of(request, name, token_id):
    return view(name, 'owner_of', token_id=token_id)


@app.route('/registries/<name>/balance/<account>', methods=['GET'])
async def balance_of(request, name, account):
    return view(name, 'balance_of', account=account)


@app.route('/registries/<name>/approved/<token_id:int>', methods=['GET'])
async def get_approved(request, name, token_id):
    return view(name, 'get_approved', token_id=token_id)


@app.route('/registries/<name>/operators/<owner>/<operator>', methods=['GET'])
async def is_approved_for_all(request, name, owner, operator):
    return view(name, 'is_approved_for_all', owner=owner, operator=operator)


@app.route('/registries/<name>/tokens/<account>', methods=['GET'])
async def get_token_ids_of(request, name, account):
    return view(name, 'get_token_ids_of', account=account)


@app.route('/registries/<name>/uri/<token_id:int>', methods=['GET'])
async def get_token_uri(request, name, token_id):
    return view(name, 'get_token_uri', token_id=token_id)


# Expects json object such that:
'''
{
    'sender': 'string',
    'function': 'string',
    'kwargs': {}
}
'''
@app.route('/registries/<name>/submit', methods=['POST'])
async def submit(request, name):
    payload = request.json

    if not isinstance(payload, dict) or payload.get('function') is None or payload.get('sender') is None:
        return json({'error': 'malformed payload', 'code': 'MalformedPayload'}, status=400)

    output = rpc.run({
        'sender': payload.get('sender'),
        'contract': name,
        'function': payload.get('function'),
        'kwargs': payload.get('kwargs') or {}
    })

    log.debug('Submitted {} to {}: {}'.format(payload.get('function'), name, output['status_code']))

    return respond(output)


@app.route('/rpc', methods=['POST'])
async def json_rpc(request):
    payload = request.json

    if not isinstance(payload, dict):
        return json({'error': 'malformed payload', 'code': 'MalformedPayload'}, status=400)

    try:
        response = rpc.process_json_rpc_command(payload)
    except TypeError as e:
        return json({'error': str(e), 'code': 'MalformedPayload'}, status=400)

    if response is None:
        return json({'error': 'unknown command', 'code': 'UnknownCommand'}, status=400)

    return json({'response': response}, status=200)


def start_webserver():
    if ssl:
        app.run(host='0.0.0.0', port=443, workers=config.NUM_WORKERS, debug=False, access_log=False, ssl=ssl)
    else:
        app.run(host='0.0.0.0', port=config.WEB_SERVER_PORT, workers=config.NUM_WORKERS, debug=False,
                access_log=False)


if __name__ == '__main__':
    start_webserver()
