"""Tests for option schema defaults and normalization."""

import sys
import unittest
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from types import SimpleNamespace

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from FacetQuery.compiler.options import OptionKind, OptionSchema, OptionSpec, ref_group, refs
from FacetQuery.core.errors import (
    InvalidOptionError,
    MalformedTemporalError,
    OptionShapeError,
    UnknownOptionError,
)
from FacetQuery.core.references import EntityRef, RawId
from FacetQuery.indices.installments import INSTALLMENT_SCHEMA
from FacetQuery.indices.purchases import PURCHASE_SCHEMA


class TestDefaults(unittest.TestCase):
    def test_every_key_present_after_normalize(self) -> None:
        normalized = PURCHASE_SCHEMA.normalize({})
        self.assertEqual(set(normalized), set(PURCHASE_SCHEMA.names()))

    def test_defaults_are_inert(self) -> None:
        defaults = PURCHASE_SCHEMA.defaults
        self.assertEqual(defaults["seller"], ())
        self.assertIs(defaults["exclude_refunded"], False)
        self.assertIsNone(defaults["archived"])
        self.assertIsNone(defaults["created_after"])
        self.assertIsNone(defaults["limit"])
        self.assertEqual(dict(defaults["any_products_or_variants"]), {"products": (), "variants": ()})

    def test_defaults_table_is_read_only(self) -> None:
        with self.assertRaises(TypeError):
            PURCHASE_SCHEMA.defaults["seller"] = (1,)  # type: ignore[index]

    def test_normalized_options_are_read_only(self) -> None:
        normalized = PURCHASE_SCHEMA.normalize({"seller": 1})
        with self.assertRaises(TypeError):
            normalized["seller"] = (2,)  # type: ignore[index]

    def test_duplicate_option_rejected(self) -> None:
        with self.assertRaisesRegex(ValueError, "seller"):
            OptionSchema("dupes", (refs("seller"), refs("seller")))


class TestUnknownOptions(unittest.TestCase):
    def test_unknown_key_rejected(self) -> None:
        with self.assertRaises(UnknownOptionError) as ctx:
            PURCHASE_SCHEMA.normalize({"sellr": 1})
        self.assertEqual(ctx.exception.names, ("sellr",))
        self.assertEqual(ctx.exception.family, "schema")
        self.assertIn("purchases", str(ctx.exception))

    def test_all_unknown_keys_reported(self) -> None:
        with self.assertRaises(UnknownOptionError) as ctx:
            INSTALLMENT_SCHEMA.normalize({"zeta": 1, "alpha": 2, "seller": 3})
        self.assertEqual(ctx.exception.names, ("alpha", "zeta"))

    def test_option_of_other_collection_rejected(self) -> None:
        with self.assertRaises(UnknownOptionError):
            INSTALLMENT_SCHEMA.normalize({"seller_query": "jane"})

    def test_unknown_is_value_error(self) -> None:
        with self.assertRaisesRegex(ValueError, "exclude_refundd"):
            PURCHASE_SCHEMA.normalize({"exclude_refundd": True})

    def test_option_lookup(self) -> None:
        self.assertIs(PURCHASE_SCHEMA.spec("seller").kind, OptionKind.REFS)
        self.assertEqual(PURCHASE_SCHEMA.spec("exclude_product").family, "exclusion")
        with self.assertRaises(UnknownOptionError) as ctx:
            PURCHASE_SCHEMA.spec("sellers")
        self.assertEqual(ctx.exception.names, ("sellers",))


class TestReferenceNormalization(unittest.TestCase):
    def test_scalar_id_wrapped(self) -> None:
        normalized = PURCHASE_SCHEMA.normalize({"seller": 7})
        self.assertEqual(normalized["seller"], (7,))

    def test_entity_and_ids_mixed(self) -> None:
        user = SimpleNamespace(id=42)
        normalized = PURCHASE_SCHEMA.normalize({"seller": [user, 3, "abc"]})
        self.assertEqual(normalized["seller"], (42, 3, "abc"))

    def test_tagged_references(self) -> None:
        normalized = PURCHASE_SCHEMA.normalize({"product": [RawId(5), EntityRef(SimpleNamespace(id=6))]})
        self.assertEqual(normalized["product"], (5, 6))

    def test_duplicates_dropped_in_order(self) -> None:
        normalized = PURCHASE_SCHEMA.normalize({"variant": [3, 1, 3, SimpleNamespace(id=1)]})
        self.assertEqual(normalized["variant"], (3, 1))

    def test_set_input_sorted(self) -> None:
        normalized = PURCHASE_SCHEMA.normalize({"variant": {9, 2, 5}})
        self.assertEqual(normalized["variant"], (2, 5, 9))

    def test_empty_list_is_unconstrained(self) -> None:
        normalized = PURCHASE_SCHEMA.normalize({"seller": []})
        self.assertEqual(normalized["seller"], ())

    def test_none_is_default(self) -> None:
        normalized = PURCHASE_SCHEMA.normalize({"seller": None, "archived": None})
        self.assertEqual(normalized["seller"], ())
        self.assertIsNone(normalized["archived"])

    def test_bool_is_not_an_identifier(self) -> None:
        with self.assertRaises(OptionShapeError) as ctx:
            PURCHASE_SCHEMA.normalize({"seller": True})
        self.assertEqual(ctx.exception.option, "seller")
        self.assertEqual(ctx.exception.family, "identity")

    def test_object_without_id_rejected(self) -> None:
        with self.assertRaisesRegex(TypeError, "exclude_product"):
            PURCHASE_SCHEMA.normalize({"exclude_product": [object()]})

    def test_exclusion_family_reported(self) -> None:
        with self.assertRaises(OptionShapeError) as ctx:
            PURCHASE_SCHEMA.normalize({"exclude_product": [1.5]})
        self.assertEqual(ctx.exception.family, "exclusion")

    def test_entity_without_usable_id_rejected(self) -> None:
        with self.assertRaisesRegex(OptionShapeError, "no usable id"):
            PURCHASE_SCHEMA.normalize({"seller": SimpleNamespace(id=None)})


class TestRefGroupNormalization(unittest.TestCase):
    def test_members_normalized(self) -> None:
        normalized = PURCHASE_SCHEMA.normalize(
            {"any_products_or_variants": {"products": SimpleNamespace(id=1), "variants": [2, 3]}}
        )
        group = normalized["any_products_or_variants"]
        self.assertEqual(group["products"], (1,))
        self.assertEqual(group["variants"], (2, 3))

    def test_missing_member_defaults_empty(self) -> None:
        normalized = PURCHASE_SCHEMA.normalize({"any_products_or_variants": {"variants": 4}})
        self.assertEqual(normalized["any_products_or_variants"]["products"], ())

    def test_unknown_member_rejected(self) -> None:
        with self.assertRaisesRegex(InvalidOptionError, "bundles"):
            PURCHASE_SCHEMA.normalize({"any_products_or_variants": {"bundles": [1]}})

    def test_scalar_rejected(self) -> None:
        with self.assertRaises(OptionShapeError):
            PURCHASE_SCHEMA.normalize({"any_products_or_variants": 5})

    def test_member_error_names_member(self) -> None:
        schema = OptionSchema("groups", (ref_group("either", ("left", "right")),))
        with self.assertRaisesRegex(OptionShapeError, "either.right"):
            schema.normalize({"either": {"right": [object()]}})


class TestScalarNormalization(unittest.TestCase):
    def test_values_wrap_and_strip(self) -> None:
        normalized = PURCHASE_SCHEMA.normalize({"country": " US ", "state": ["successful", "", "successful"]})
        self.assertEqual(normalized["country"], ("US",))
        self.assertEqual(normalized["state"], ("successful",))

    def test_values_reject_non_strings(self) -> None:
        with self.assertRaises(OptionShapeError):
            PURCHASE_SCHEMA.normalize({"country": ["US", 1]})

    def test_flag_requires_bool(self) -> None:
        with self.assertRaisesRegex(OptionShapeError, "exclude_giftees"):
            PURCHASE_SCHEMA.normalize({"exclude_giftees": "yes"})

    def test_tristate_keeps_false(self) -> None:
        normalized = PURCHASE_SCHEMA.normalize({"archived": False})
        self.assertIs(normalized["archived"], False)

    def test_number_rejects_bool(self) -> None:
        with self.assertRaises(OptionShapeError) as ctx:
            PURCHASE_SCHEMA.normalize({"price_greater_than": True})
        self.assertEqual(ctx.exception.family, "range")

    def test_blank_text_is_absent(self) -> None:
        normalized = PURCHASE_SCHEMA.normalize({"seller_query": "   "})
        self.assertIsNone(normalized["seller_query"])

    def test_blank_keyword_is_absent(self) -> None:
        normalized = PURCHASE_SCHEMA.normalize({"email": "  "})
        self.assertIsNone(normalized["email"])

    def test_keyword_choices(self) -> None:
        self.assertEqual(INSTALLMENT_SCHEMA.normalize({"status": " draft "})["status"], "draft")
        with self.assertRaisesRegex(InvalidOptionError, "status"):
            INSTALLMENT_SCHEMA.normalize({"status": "archived"})

    def test_count_rejects_negative(self) -> None:
        with self.assertRaises(InvalidOptionError) as ctx:
            PURCHASE_SCHEMA.normalize({"offset": -1})
        self.assertEqual(ctx.exception.family, "native")

    def test_count_rejects_float(self) -> None:
        with self.assertRaises(OptionShapeError):
            PURCHASE_SCHEMA.normalize({"limit": 2.5})

    def test_native_passthrough_untouched(self) -> None:
        sort = [{"created_at": "desc"}, {"id": "desc"}]
        normalized = PURCHASE_SCHEMA.normalize({"sort": sort})
        self.assertIs(normalized["sort"], sort)

    def test_option_family_derived_from_kind(self) -> None:
        self.assertEqual(OptionSpec("q", OptionKind.TEXT).family, "fulltext")
        self.assertEqual(OptionSpec("q", OptionKind.TEXT, family="custom").family, "custom")


class TestTemporalNormalization(unittest.TestCase):
    def test_aware_datetime_converted_to_utc(self) -> None:
        moment = datetime(2024, 3, 1, 12, 30, tzinfo=timezone(timedelta(hours=2)))
        normalized = PURCHASE_SCHEMA.normalize({"created_after": moment})
        self.assertEqual(normalized["created_after"], "2024-03-01T10:30:00Z")

    def test_naive_datetime_taken_as_utc(self) -> None:
        normalized = PURCHASE_SCHEMA.normalize({"created_before": datetime(2024, 3, 1, 8, 0, 5)})
        self.assertEqual(normalized["created_before"], "2024-03-01T08:00:05Z")

    def test_date_is_midnight_utc(self) -> None:
        normalized = PURCHASE_SCHEMA.normalize({"created_on_or_after": date(2023, 12, 31)})
        self.assertEqual(normalized["created_on_or_after"], "2023-12-31T00:00:00Z")

    def test_iso_string_with_offset(self) -> None:
        normalized = PURCHASE_SCHEMA.normalize({"created_on_or_before": "2024-01-15T23:00:00-05:00"})
        self.assertEqual(normalized["created_on_or_before"], "2024-01-16T04:00:00Z")

    def test_iso_date_string(self) -> None:
        normalized = PURCHASE_SCHEMA.normalize({"created_after": "2024-02-29"})
        self.assertEqual(normalized["created_after"], "2024-02-29T00:00:00Z")

    def test_malformed_string_rejected(self) -> None:
        with self.assertRaises(MalformedTemporalError) as ctx:
            PURCHASE_SCHEMA.normalize({"created_after": "last tuesday"})
        self.assertEqual(ctx.exception.option, "created_after")
        self.assertEqual(ctx.exception.family, "range")

    def test_locale_format_rejected(self) -> None:
        with self.assertRaises(MalformedTemporalError):
            PURCHASE_SCHEMA.normalize({"created_after": "03/04/2024"})

    def test_number_is_not_a_timestamp(self) -> None:
        with self.assertRaises(OptionShapeError):
            PURCHASE_SCHEMA.normalize({"created_after": 1700000000})


if __name__ == "__main__":
    unittest.main()
