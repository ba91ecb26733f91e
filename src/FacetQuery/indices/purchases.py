"""Purchase (financial transaction) search options and builders.

Calling the compiler with no options matches every purchase: every option
below is inert by default.

Reference options accept ids, entities with an ``id``, or lists of both.
"""

from __future__ import annotations

from FacetQuery.compiler.assembler import QueryCompiler
from FacetQuery.compiler.filters import ExcludeAny, MatchAny, MatchAnyField, MatchAnyMember, MatchKeyword
from FacetQuery.compiler.flags import REQUIRED_SCORED, ExcludeWhenSet, RequireWhenSet, TriState
from FacetQuery.compiler.fulltext import PlainTextSearch, SellerTextSearch
from FacetQuery.compiler.options import (
    NATIVE_OPTIONS,
    OptionSchema,
    flag,
    keyword,
    number,
    ref_group,
    refs,
    text,
    time,
    tristate,
    values,
)
from FacetQuery.compiler.ranges import Bound, temporal_bounds
from FacetQuery.core.clauses import BoolGroup, Exists, Term

COLLECTION = "purchases"

SELECTED_FLAGS = "selected_flags"

PURCHASE_SCHEMA = OptionSchema(
    COLLECTION,
    (
        # Objects and ids
        refs("seller"),
        refs("purchaser"),
        refs("revenue_sharing_user"),
        refs("product"),
        refs("exclude_product", family="exclusion"),
        refs("exclude_purchasers_of_product", family="exclusion"),
        refs("variant"),
        refs("exclude_variant", family="exclusion"),
        refs("exclude_purchasers_of_variant", family="exclusion"),
        refs("exclude_purchase", family="exclusion"),
        ref_group("any_products_or_variants", ("products", "variants")),
        refs("affiliate_user"),
        refs("taxonomy"),
        # Booleans
        flag("exclude_non_original_subscription_purchases"),
        flag("exclude_deactivated_subscriptions"),
        flag("exclude_cancelled_or_pending_cancellation_subscriptions"),
        flag("exclude_refunded"),
        flag("exclude_refunded_except_subscriptions"),
        flag("exclude_unreversed_chargedback"),
        flag("exclude_not_charged_non_free_trial_purchases"),
        flag("exclude_cant_contact"),
        flag("exclude_giftees"),
        flag("exclude_gifters"),
        flag("exclude_non_successful_preorder_authorizations"),
        flag("exclude_bundle_product_purchases"),
        flag("exclude_commission_completion_purchases"),
        # Ranges
        number("price_greater_than"),
        number("price_less_than"),
        time("created_after"),
        time("created_on_or_after"),
        time("created_before"),
        time("created_on_or_before"),
        # Others
        values("country"),
        keyword("email"),
        values("state"),
        tristate("archived"),
        tristate("recommended"),
        # Fulltext search
        text("seller_query"),
        text("buyer_query"),
    )
    + NATIVE_OPTIONS,
)

# A not-charged purchase that is not a free trial.
_NOT_CHARGED_NON_FREE_TRIAL = BoolGroup(
    must=(
        Term("purchase_state", "not_charged"),
        BoolGroup(must_not=(Term(SELECTED_FLAGS, "is_free_trial_purchase"),)),
    )
)

PURCHASE_BUILDERS = (
    # Objects and ids
    MatchAny("seller", "seller_id"),
    MatchAny("purchaser", "purchaser_id"),
    MatchAny("product", "product_id"),
    PlainTextSearch("buyer_query", ("product_name", "product_description", "seller_name")),
    ExcludeAny("exclude_product", "product_id"),
    ExcludeAny("exclude_purchasers_of_product", "product_ids_from_same_seller_purchased_by_purchaser"),
    MatchAny("variant", "variant_ids"),
    ExcludeAny("exclude_variant", "variant_ids"),
    ExcludeAny("exclude_purchasers_of_variant", "variant_ids_from_same_seller_purchased_by_purchaser"),
    ExcludeAny("exclude_purchase", "id"),
    MatchAnyMember("any_products_or_variants", {"products": "product_id", "variants": "variant_ids"}),
    MatchAny("affiliate_user", "affiliate_credit_affiliate_user_id"),
    MatchAnyField("revenue_sharing_user", ("affiliate_credit_affiliate_user_id", "seller_id")),
    MatchAny("taxonomy", "taxonomy_id"),
    # Booleans
    RequireWhenSet("exclude_refunded", Term("stripe_refunded", False)),
    RequireWhenSet("exclude_refunded_except_subscriptions", Term("not_refunded_except_subscriptions", True)),
    RequireWhenSet("exclude_unreversed_chargedback", Term("not_chargedback_or_chargedback_reversed", True)),
    RequireWhenSet(
        "exclude_non_original_subscription_purchases",
        Term("not_subscription_or_original_subscription_purchase", True),
    ),
    ExcludeWhenSet("exclude_not_charged_non_free_trial_purchases", _NOT_CHARGED_NON_FREE_TRIAL),
    ExcludeWhenSet("exclude_deactivated_subscriptions", Exists("subscription_deactivated_at")),
    ExcludeWhenSet("exclude_cancelled_or_pending_cancellation_subscriptions", Exists("subscription_cancelled_at")),
    RequireWhenSet("exclude_cant_contact", Term("can_contact", True)),
    ExcludeWhenSet("exclude_giftees", Term(SELECTED_FLAGS, "is_gift_receiver_purchase")),
    ExcludeWhenSet("exclude_gifters", Term(SELECTED_FLAGS, "is_gift_sender_purchase")),
    RequireWhenSet(
        "exclude_non_successful_preorder_authorizations",
        Term("successful_authorization_or_without_preorder", True),
    ),
    ExcludeWhenSet("exclude_bundle_product_purchases", Term(SELECTED_FLAGS, "is_bundle_product_purchase")),
    ExcludeWhenSet(
        "exclude_commission_completion_purchases",
        Term(SELECTED_FLAGS, "is_commission_completion_purchase"),
    ),
    # Ranges
    Bound("price_greater_than", "price_cents", "gt"),
    Bound("price_less_than", "price_cents", "lt"),
    *temporal_bounds("created", "created_at"),
    # Others
    MatchAny("country", "country_or_ip_country"),
    MatchKeyword("email", "email.raw", lowercase=True),
    MatchAny("state", "purchase_state"),
    TriState("archived", Term(SELECTED_FLAGS, "is_archived"), required_in=REQUIRED_SCORED),
    TriState("recommended", Term(SELECTED_FLAGS, "was_product_recommended"), required_in=REQUIRED_SCORED),
    # Fulltext search
    SellerTextSearch(
        "seller_query",
        phrase_field="full_name",
        fields=("email", "email_domain", "full_name"),
        email_fields=("email.raw", "paypal_email.raw"),
        serial_field="license_serial",
    ),
)

purchase_compiler = QueryCompiler(PURCHASE_SCHEMA, PURCHASE_BUILDERS)
