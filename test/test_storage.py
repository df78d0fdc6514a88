import unittest
from dataclasses import dataclass

from stackpool import Box, Cell, EMPTY, InlineStorage, IndirectStorage, PoolConfigError, StackPool


@dataclass
class UserTest:
    id: int
    name: str = ''


class TestInlineStorage(unittest.TestCase):
    def test_initialize(self) -> None:
        storage = InlineStorage()
        cell = Cell()
        self.assertTrue(cell.is_empty())
        self.assertIs(EMPTY, storage.address_of(cell))

        storage.initialize(cell, UserTest, 1, name='a')
        self.assertEqual(UserTest(id=1, name='a'), storage.address_of(cell))
        self.assertIs(cell.value, storage.address_of(cell))

        old = cell.value
        storage.initialize(cell, UserTest, 2)
        self.assertEqual(UserTest(id=2), storage.address_of(cell))
        self.assertIsNot(old, storage.address_of(cell))

        storage.reset(cell)
        self.assertTrue(cell.is_empty())

    def test_reuse(self) -> None:
        storage = InlineStorage(reuse=True)
        cell = Cell()

        storage.initialize(cell, UserTest, 1, name='a')
        old = cell.value

        storage.initialize(cell, UserTest, 2, name='b')
        self.assertIs(old, cell.value)
        self.assertEqual(UserTest(id=2, name='b'), cell.value)

    def test_reuse_immutable_type(self) -> None:
        storage = InlineStorage(reuse=True)
        cell = Cell()

        storage.initialize(cell, int, 1)
        storage.initialize(cell, int, 2)
        self.assertEqual(2, cell.value)

        storage.initialize(cell, str, 'abc')
        self.assertEqual('abc', cell.value)

    def test_reuse_in_pool(self) -> None:
        pool = StackPool(UserTest, 1, storage=InlineStorage(reuse=True))

        h = pool.create(1)
        first = h.get()
        h.release()

        h = pool.create(2, name='x')
        self.assertIs(first, h.get())
        self.assertEqual(UserTest(id=2, name='x'), h.value)

        h.release()
        self.assertEqual(1, pool.size_left())


class TestIndirectStorage(unittest.TestCase):
    def test_initialize(self) -> None:
        storage = IndirectStorage()
        cell = Cell()
        self.assertIs(EMPTY, storage.address_of(cell))

        storage.initialize(cell, UserTest, 1)
        self.assertIsInstance(cell.value, Box)
        self.assertEqual(UserTest(id=1), storage.address_of(cell))
        self.assertIs(cell.value.obj, storage.address_of(cell))

        old_box = cell.value
        storage.initialize(cell, UserTest, 2)
        self.assertIsNot(old_box, cell.value)
        self.assertEqual(UserTest(id=2), storage.address_of(cell))

        storage.reset(cell)
        self.assertIs(EMPTY, storage.address_of(cell))

    def test_validate(self) -> None:
        storage = IndirectStorage()
        storage.validate(UserTest)

        with self.assertRaises(PoolConfigError):
            storage.validate(Box)

    def test_custom_box(self) -> None:
        class ListBox:
            def __init__(self, obj):
                self.obj = obj

        pool = StackPool(UserTest, 2, storage=IndirectStorage(box_type=ListBox))

        h = pool.create(3)
        self.assertEqual(UserTest(id=3), h.value)
        self.assertIn('IndirectStorage(box_type=ListBox)', repr(pool))

        h.release()
        self.assertEqual(2, pool.size_left())

    def test_boxed_int_pool(self) -> None:
        pool = StackPool(int, 2, storage=IndirectStorage())

        h1 = pool.create(1)
        h2 = pool.create(1)

        self.assertEqual(1, h1.value)
        self.assertEqual(1, h2.value)
        self.assertNotEqual(h1.index, h2.index)

        h1.release()
        self.assertEqual(1, pool.size_left())
        self.assertEqual(1, h2.value)
