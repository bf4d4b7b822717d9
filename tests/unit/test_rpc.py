from unittest import TestCase
from nftregistry.server import rpc


class TestRPC(TestCase):
    def setUp(self):
        rpc.client.flush()

        self.registry = rpc.client.deploy(name='punks', token_name='Punks', token_symbol='PNK')

    def tearDown(self):
        rpc.client.flush()

    def test_get_registries(self):
        self.assertDictEqual(rpc.get_registries(), {'registries': ['punks']})

    def test_get_methods(self):
        methods = rpc.get_methods('punks')['methods']
        by_name = {m['name']: m['arguments'] for m in methods}

        self.assertListEqual(by_name['mint'], ['to'])
        self.assertListEqual(by_name['approve'], ['to', 'token_id'])
        self.assertListEqual(by_name['owner_of'], ['token_id'])
        self.assertNotIn('_burn', by_name)

    def test_get_methods_missing_contract(self):
        self.assertDictEqual(rpc.get_methods('kitties'), {'status': rpc.NO_CONTRACT})

    def test_get_var(self):
        self.registry.mint(to='stu')

        self.assertDictEqual(rpc.get_var('punks', 'symbol'), {'value': 'PNK'})
        self.assertDictEqual(rpc.get_var('punks', 'owners', '1'), {'value': 'stu'})

    def test_get_var_missing(self):
        self.assertDictEqual(rpc.get_var('kitties', 'symbol'), {'status': rpc.NO_CONTRACT})
        self.assertDictEqual(rpc.get_var('punks', 'owners', '1'), {'status': rpc.NO_VARIABLE})

    def test_run(self):
        response = rpc.run({
            'sender': 'stu',
            'contract': 'punks',
            'function': 'mint',
            'kwargs': {'to': 'raghu'}
        })

        self.assertEqual(response['status_code'], 0)
        self.assertEqual(response['result'], 1)
        self.assertListEqual(response['events'], [{
            'contract': 'punks',
            'event': 'Transfer',
            'data': {'from': None, 'to': 'raghu', 'id': 1}
        }])

    def test_run_failure_is_serializable(self):
        response = rpc.run({
            'sender': 'stu',
            'contract': 'punks',
            'function': 'mint',
            'kwargs': {'to': None}
        })

        self.assertEqual(response['status_code'], 1)
        self.assertEqual(response['code'], 'ZeroAddress')
        self.assertEqual(response['error'], 'Cannot mint to the zero address')
        self.assertNotIn('result', response)

    def test_run_all(self):
        responses = rpc.run_all([
            {'sender': 'stu', 'contract': 'punks', 'function': 'mint', 'kwargs': {'to': 'stu'}},
            {'sender': 'raghu', 'contract': 'punks', 'function': 'transfer',
             'kwargs': {'sender': 'stu', 'to': 'raghu', 'token_id': 1}},
            {'sender': 'stu', 'contract': 'punks', 'function': 'transfer',
             'kwargs': {'sender': 'stu', 'to': 'raghu', 'token_id': 1}},
        ])

        self.assertListEqual([r['status_code'] for r in responses], [0, 1, 0])
        self.assertEqual(responses[1]['code'], 'Unauthorized')
        self.assertEqual(self.registry.owner_of(token_id=1), 'raghu')

    def test_query(self):
        self.registry.mint(to='stu')

        response = rpc.query('punks', 'get_token_ids_of', {'account': 'stu'})

        self.assertEqual(response['status_code'], 0)
        self.assertListEqual(response['result'], [1])

    def test_query_cannot_mutate(self):
        response = rpc.query('punks', 'mint', {'to': 'stu'})

        self.assertEqual(response['status_code'], 1)
        self.assertEqual(response['code'], 'MethodNotFound')
        self.assertEqual(self.registry.get_total_minted(), 0)

    def test_query_missing_contract(self):
        response = rpc.query('kitties', 'owner_of', {'token_id': 1})

        self.assertEqual(response['code'], 'ContractNotFound')

    def test_query_error(self):
        response = rpc.query('punks', 'get_approved', {'token_id': 1})

        self.assertEqual(response['status_code'], 1)
        self.assertEqual(response['code'], 'NotFound')

    def test_process_json_rpc_command(self):
        payload = {
            'command': 'query',
            'arguments': {
                'contract': 'punks',
                'function': 'get_symbol',
                'kwargs': {}
            }
        }

        response = rpc.process_json_rpc_command(payload)

        self.assertEqual(response['result'], 'PNK')

    def test_process_json_rpc_command_unknown(self):
        self.assertIsNone(rpc.process_json_rpc_command({'command': 'drop_tables', 'arguments': {}}))

    def test_process_json_rpc_command_missing_arguments(self):
        self.assertIsNone(rpc.process_json_rpc_command({'command': 'get_registries'}))
