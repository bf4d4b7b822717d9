from unittest import TestCase
from nftregistry.db.driver import InMemDriver, CacheDriver, ContractDriver
from datetime import datetime, timezone


class TestInMemDriver(TestCase):
    # Flush this sucker every test
    def setUp(self):
        self.d = InMemDriver()
        self.d.flush()

    def tearDown(self):
        self.d.flush()

    def test_get_set(self):
        a = 'a'
        self.d.set('b', a)

        b = self.d.get('b')
        self.assertEqual(a, b)

    def test_values_are_stored_encoded(self):
        self.d.set('b', 123)

        self.assertEqual(self.d.db['b'], '123')

    def test_delete(self):
        a = 'a'
        self.d.set('b', a)

        b = self.d.get('b')
        self.assertEqual(a, b)

        self.d.delete('b')

        b = self.d.get('b')
        self.assertIsNone(b)

    def test_set_none_deletes(self):
        self.d.set('b', 1)
        self.d.set('b', None)

        self.assertNotIn('b', self.d.db)

    def test_iter(self):
        prefix_1_keys = ['b77aa343e339', 'bc22ede6e6fb', 'b93dbb37d993']
        prefix_2_keys = ['x37fbab0bd2e6', 'x30c6eb2ad176']

        for k in prefix_1_keys + prefix_2_keys:
            self.d.set(k, 'something')

        self.assertListEqual(self.d.iter(prefix='b'), sorted(prefix_1_keys))
        self.assertListEqual(self.d.iter(prefix='x'), sorted(prefix_2_keys))

    def test_iter_length(self):
        for k in ['a1', 'a2', 'a3']:
            self.d.set(k, 1)

        self.assertListEqual(self.d.iter(prefix='a', length=2), ['a1', 'a2'])

    def test_keys(self):
        self.d.set('b', 1)
        self.d.set('a', 1)

        self.assertListEqual(self.d.keys(), ['a', 'b'])

    def test_getitem_missing_raises(self):
        with self.assertRaises(KeyError):
            self.d['nope']

    def test_setitem_getitem(self):
        self.d['a'] = 5
        self.assertEqual(self.d['a'], 5)

        del self.d['a']
        self.assertIsNone(self.d.get('a'))


class TestCacheDriver(TestCase):
    def setUp(self):
        self.raw = InMemDriver()
        self.d = CacheDriver(driver=self.raw)

    def test_set_is_pending_until_commit(self):
        self.d.set('a', 1)

        self.assertEqual(self.d.get('a'), 1)
        self.assertIsNone(self.raw.get('a'))

        self.d.commit()

        self.assertEqual(self.raw.get('a'), 1)
        self.assertDictEqual(self.d.pending_writes, {})

    def test_pending_delete_hides_stored_value(self):
        self.raw.set('a', 1)

        self.d.delete('a')

        self.assertIsNone(self.d.get('a'))
        self.assertEqual(self.raw.get('a'), 1)

    def test_commit_applies_deletes(self):
        self.raw.set('a', 1)

        self.d.delete('a')
        self.d.commit()

        self.assertIsNone(self.raw.get('a'))

    def test_rollback_discards_pending(self):
        self.d.set('a', 1)
        self.d.rollback()

        self.assertIsNone(self.d.get('a'))
        self.assertDictEqual(self.d.pending_writes, {})

    def test_rollback_to_savepoint_keeps_earlier_writes(self):
        self.d.set('a', 1)
        savepoint = self.d.savepoint()

        self.d.set('a', 2)
        self.d.set('b', 3)

        self.d.rollback(savepoint)

        self.assertEqual(self.d.get('a'), 1)
        self.assertIsNone(self.d.get('b'))

    def test_reads_are_recorded(self):
        self.raw.set('a', 1)

        self.d.get('a')

        self.assertEqual(self.d.pending_reads['a'], 1)

    def test_default_backing_driver_is_in_memory(self):
        self.assertIsInstance(CacheDriver().driver, InMemDriver)


class TestContractDriver(TestCase):
    def setUp(self):
        self.d = ContractDriver(driver=InMemDriver())

    def tearDown(self):
        self.d.flush()

    def test_make_key(self):
        self.assertEqual(self.d.make_key('reg', 'owners'), 'reg.owners')
        self.assertEqual(self.d.make_key('reg', 'owners', [1]), 'reg.owners:1')
        self.assertEqual(self.d.make_key('reg', 'ops', ['a', 'b']), 'reg.ops:a:b')

    def test_get_set_var(self):
        self.d.set_var('reg', 'owners', arguments=[1], value='stu')

        self.assertEqual(self.d.get_var('reg', 'owners', arguments=[1]), 'stu')
        self.assertEqual(self.d.get('reg.owners:1'), 'stu')

    def test_items_merges_pending_and_stored(self):
        self.d.set('reg.a:1', 1)
        self.d.commit()

        self.d.set('reg.a:2', 2)

        self.assertDictEqual(self.d.items('reg.a:'), {'reg.a:1': 1, 'reg.a:2': 2})

    def test_items_skips_pending_deletes(self):
        self.d.set('reg.a:1', 1)
        self.d.commit()

        self.d.delete('reg.a:1')

        self.assertDictEqual(self.d.items('reg.a:'), {})

    def test_keys_and_values(self):
        self.d.set('reg.a:1', 'x')
        self.d.set('reg.a:2', 'y')

        self.assertListEqual(self.d.keys('reg.a:'), ['reg.a:1', 'reg.a:2'])
        self.assertListEqual(self.d.values('reg.a:'), ['x', 'y'])

    def test_set_contract(self):
        now = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        self.assertTrue(self.d.set_contract('reg', 'AssetRegistry', owner='stu', timestamp=now))

        self.assertEqual(self.d.get_contract('reg'), 'AssetRegistry')
        self.assertEqual(self.d.get_owner('reg'), 'stu')
        self.assertEqual(self.d.get_time_submitted('reg'), now)

    def test_set_contract_twice_fails(self):
        self.d.set_contract('reg', 'AssetRegistry')

        self.assertFalse(self.d.set_contract('reg', 'Other'))
        self.assertEqual(self.d.get_contract('reg'), 'AssetRegistry')

    def test_owner_defaults_to_none(self):
        self.d.set_contract('reg', 'AssetRegistry')

        self.assertIsNone(self.d.get_owner('reg'))

    def test_time_submitted_of_missing_contract(self):
        self.assertIsNone(self.d.get_time_submitted('nope'))

    def test_get_contracts(self):
        self.d.set_contract('reg', 'AssetRegistry')
        self.d.set_contract('other', 'AssetRegistry')
        self.d.commit()

        self.assertListEqual(self.d.get_contracts(), ['other', 'reg'])

    def test_get_contract_keys_does_not_leak_into_similar_names(self):
        self.d.set_contract('reg', 'AssetRegistry')
        self.d.set_contract('reg2', 'AssetRegistry')
        self.d.commit()

        keys = self.d.get_contract_keys('reg')

        self.assertTrue(all(k.startswith('reg.') for k in keys))

    def test_flush(self):
        self.d.set('a', 1)
        self.d.commit()
        self.d.set('b', 2)

        self.d.flush()

        self.assertIsNone(self.d.get('a'))
        self.assertIsNone(self.d.get('b'))
