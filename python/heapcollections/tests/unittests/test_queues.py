import copy
import unittest

import numpy as np

from heapcollections.datastructures.orderings import (by_key, greater_first,
                                                      lesser_first)
from heapcollections.datastructures.queues import PriorityQueue

VALUE = 50
ITEMS = [4, 5, 3, 3, 1, 2]


class TestPriorityQueue(unittest.TestCase):
    def test_empty_queue(self):
        queue: PriorityQueue[int] = PriorityQueue(greater_first)
        self.assertEqual(queue.count, 0)
        self.assertEqual(len(queue), 0)
        self.assertTrue(queue.is_empty)
        self.assertIsNone(queue.peek())
        self.assertIsNone(queue.pop())
        self.assertEqual(queue.count, 0)

    def test_init_with_items(self):
        queue: PriorityQueue[int] = PriorityQueue(greater_first, ITEMS)
        self.assertEqual(queue.count, len(ITEMS))
        for item in sorted(ITEMS, reverse=True):
            self.assertEqual(queue.pop(), item)
        self.assertIsNone(queue.pop())

    def test_single_push(self):
        queue: PriorityQueue[int] = PriorityQueue.with_ordering(greater_first)
        queue.push(VALUE)
        self.assertEqual(queue.count, 1)
        self.assertEqual(queue.peek(), VALUE)

    def test_consecutive_push(self):
        queue: PriorityQueue[int] = PriorityQueue.with_ordering(greater_first)
        for item in ITEMS:
            queue.push(item)
        self.assertEqual(queue.count, len(ITEMS))
        self.assertListEqual(
            [queue.pop() for _ in ITEMS],
            [5, 4, 3, 3, 2, 1]
        )

    def test_count_after_pushes_and_pops(self):
        queue: PriorityQueue[int] = PriorityQueue(lesser_first)
        queue.push_all(*range(10))
        for _ in range(4):
            queue.pop()
        self.assertEqual(queue.count, 6)
        self.assertEqual(queue.peek(), 4)

    def test_push_from(self):
        queue: PriorityQueue[str] = PriorityQueue(by_key(len))
        queue.push_from(iter(["a", "abc", "ab"]))
        self.assertListEqual(queue.pop_all(), ["abc", "ab", "a"])
        self.assertTrue(queue.is_empty)

    def test_from_iterable(self):
        queue = PriorityQueue.from_iterable(ITEMS, greater_first)
        self.assertEqual(queue, PriorityQueue(greater_first, ITEMS))

    def test_empty_constructor(self):
        queue: PriorityQueue[int] = PriorityQueue.empty()
        self.assertTrue(queue.is_empty)
        queue.push_all(3, 1, 2)
        self.assertListEqual(list(queue), [3, 1, 2])
        self.assertEqual(queue.peek(), 3)

    def test_not_callable_ordering(self):
        with self.assertRaises(TypeError):
            PriorityQueue("greater")

    def test_remove_all(self):
        for keep_capacity in (False, True):
            queue: PriorityQueue[int] = PriorityQueue(greater_first, ITEMS)
            queue.remove_all(keep_capacity=keep_capacity)
            self.assertEqual(queue.count, 0)
            self.assertIsNone(queue.peek())

    def test_iteration(self):
        queue: PriorityQueue[int] = PriorityQueue(greater_first, ITEMS)
        remaining = list(ITEMS)
        for item in queue:
            remaining.remove(item)
        self.assertListEqual(remaining, [])
        self.assertEqual(queue.count, len(ITEMS))

    def test_iter_ordered(self):
        queue: PriorityQueue[int] = PriorityQueue(greater_first, ITEMS)
        self.assertListEqual(list(queue.iter_ordered()), [5, 4, 3, 3, 2, 1])
        self.assertEqual(queue.count, len(ITEMS))

    def test_contains(self):
        queue: PriorityQueue[int] = PriorityQueue(greater_first, ITEMS)
        self.assertIn(5, queue)
        self.assertNotIn(6, queue)

    def test_equal(self):
        queue: PriorityQueue[int] = PriorityQueue(greater_first)
        other: PriorityQueue[int] = PriorityQueue(greater_first)
        self.assertTrue(queue == other)
        queue.push(VALUE)
        self.assertFalse(queue == other)
        self.assertTrue(queue != other)
        other.push(VALUE)
        self.assertTrue(queue == other)

    def test_equal_order_independent(self):
        queue_x: PriorityQueue[int] = PriorityQueue(greater_first, [1, 2])
        queue_y: PriorityQueue[int] = PriorityQueue(greater_first, [2, 1])
        self.assertEqual(queue_x, queue_y)

    def test_equal_random_insertion_orders(self):
        rng = np.random.default_rng(7)
        values = rng.integers(0, 20, size=100).tolist()
        queue_1: PriorityQueue[int] = PriorityQueue(greater_first, values)
        queue_2: PriorityQueue[int] = PriorityQueue(
            greater_first, rng.permutation(values).tolist())
        self.assertEqual(queue_1, queue_2)

    def test_unhashable(self):
        with self.assertRaises(TypeError):
            hash(PriorityQueue(greater_first))

    def test_copy_independence(self):
        queue: PriorityQueue[int] = PriorityQueue(greater_first)
        queue.push(VALUE)
        queue_copy = queue.copy()
        queue_copy.push(99)
        self.assertEqual(queue.count, 1)
        self.assertEqual(queue_copy.count, 2)
        self.assertEqual(queue.pop(), VALUE)
        self.assertListEqual(queue_copy.pop_all(), [99, VALUE])

    def test_shallow_copy_module(self):
        queue: PriorityQueue[int] = PriorityQueue(greater_first, ITEMS)
        queue_copy = copy.copy(queue)
        self.assertEqual(queue, queue_copy)
        queue.remove_all()
        self.assertEqual(queue_copy.count, len(ITEMS))
        self.assertIs(queue_copy.ordering, greater_first)

    def test_str(self):
        queue: PriorityQueue[int] = PriorityQueue(greater_first)
        self.assertEqual(str(queue), "[]")
        queue.push(VALUE)
        self.assertEqual(str(queue), "[50]")

    def test_repr(self):
        queue: PriorityQueue[int] = PriorityQueue(greater_first, [1])
        self.assertEqual(repr(queue), "PriorityQueue(greater_first, [1])")

    def test_debug_logging(self):
        with self.assertLogs("PriorityQueue", level="DEBUG") as logs:
            PriorityQueue(greater_first, ITEMS, debug=True)
        self.assertIn("6 initial items", logs.output[0])


    def test_always_true_ordering(self):
        queue: PriorityQueue[int] = PriorityQueue(
            lambda first, second: True, range(50))
        other: PriorityQueue[int] = PriorityQueue(
            lambda first, second: True, range(50))
        self.assertIsInstance(queue == other, bool)
        self.assertListEqual(sorted(queue.iter_ordered()), list(range(50)))
        self.assertEqual(queue.count, 50)
        self.assertListEqual(sorted(queue.pop_all()), list(range(50)))
        self.assertTrue(queue.is_empty)

    def test_random_ordering(self):
        rng = np.random.default_rng(11)

        def _ordering(first: int, second: int) -> bool:
            return bool(rng.integers(0, 2))

        queue: PriorityQueue[int] = PriorityQueue(_ordering, range(50))
        other: PriorityQueue[int] = PriorityQueue(_ordering, range(49, -1, -1))
        self.assertIsInstance(queue == other, bool)
        self.assertListEqual(sorted(queue.iter_ordered()), list(range(50)))
        queue.push_all(50, 51)
        popped = [queue.pop() for _ in range(10)]
        queue.push_from(range(52, 60))
        self.assertEqual(queue.count, 50)
        popped.extend(queue.pop_all())
        self.assertListEqual(sorted(popped), list(range(60)))
        self.assertIsNone(queue.pop())

    def test_read_only_operations_do_not_log(self):
        queue: PriorityQueue[int] = PriorityQueue(
            greater_first, ITEMS, debug=True)
        with self.assertNoLogs("PriorityQueue", level="DEBUG"):
            with self.assertNoLogs("BinaryHeap", level="DEBUG"):
                str(queue)
                self.assertIn(2, queue)
                list(queue.iter_ordered())

    def test_copy_logging(self):
        queue: PriorityQueue[int] = PriorityQueue(
            greater_first, [1, 2, 3], debug=True)
        with self.assertLogs("PriorityQueue", level="DEBUG") as logs:
            queue_copy = queue.copy()
        self.assertEqual(len(logs.output), 1)
        self.assertIn("Copying priority queue of 3 items", logs.output[0])
        self.assertEqual(queue_copy.count, 3)


if __name__ == "__main__":
    unittest.main()
