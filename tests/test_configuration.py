import logging
from unittest import TestCase

from cellcomm.configuration import CKM, config
from cellcomm.core import CommunicationObject, merge
from cellcomm.errors import ConfigurationError
from cellcomm.logging import logger_manager as lm

from .mixins import TestMixin


class TestConfiguration(TestMixin, TestCase):
    def test_logging_level_names(self):
        config.logging_level = "debug"
        self.assertEqual(logging.DEBUG, config.logging_level)
        self.assertEqual(logging.DEBUG, lm.get_main_logger().logger.level)
        config.logging_level = "warning"
        self.assertEqual(logging.WARNING, config.logging_level)
        with self.assertRaises(ConfigurationError):
            config.logging_level = "verbose"

    def test_check_object_is_merged(self):
        @CKM.check_object_is_merged(merged=False)
        def single_only(obj):
            return True

        @CKM.check_object_is_merged(merged=True, argname="merged")
        def merged_only(merged):
            return True

        obj = CommunicationObject()
        merged = merge([obj])
        self.assertTrue(single_only(obj))
        self.assertTrue(merged_only(merged=merged))
        with self.assertRaises(ConfigurationError):
            single_only(merged)
        with self.assertRaises(ConfigurationError):
            merged_only(obj)

    def test_merged_slot_message(self):
        self.assertEqual(
            "This function only merges the slots of 'net', 'netP', 'idents' and 'LR'.",
            CKM.merged_slot_message(),
        )
