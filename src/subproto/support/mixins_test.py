import unittest

from hamcrest import equal_to, is_, assert_that, is_not, calling, raises

from subproto.support.mixins import CommonEqualityMixin


class ValueObject(CommonEqualityMixin):
    def __init__(self, a=None, b=None):
        self.a = a
        self.b = b


class CommonEqualityMixinTest(unittest.TestCase):

    def test_value_equivalence(self):
        e1 = ValueObject()
        e2 = ValueObject()
        e1.a = "123"
        e1.b = 123
        e2.a = "12"+"3"
        e2.b = 123
        assert_that(e1, is_(equal_to(e2)))
        assert_that(e1 == e2, is_(True))
        assert_that(e1 != e2, is_(False))

        e1.b = 0
        assert_that(e1, is_not(equal_to(e2)))
        assert_that(e1 != e2, is_(True))
        assert_that(e1 == e2, is_(False))

    def test_different_types_not_equal(self):
        assert_that(ValueObject(1, 2) == (1, 2), is_(False))

    def test_equal_values_hash_equal(self):
        assert_that(hash(ValueObject("a", 1)), is_(hash(ValueObject("a", 1))))

    def test_unhashable_attribute_hashes(self):
        value = ValueObject([1, 2])
        assert_that(hash(value), is_(hash(value)))

    def test_recursive_call(self):
        e1 = ValueObject()
        e2 = ValueObject()
        e2.a = e1
        e1.a = e2

        def compare():
            return e2 == e1

        assert_that(calling(compare), raises(ValueError))
