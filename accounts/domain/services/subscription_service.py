from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

FREE_PLAN_KEYWORDS = ("quartz", "basic", "bronze")
FREE_TIER_NAME = "Quartz"
BILLING_INTERVALS = ("monthly", "yearly")


class SubscriptionService(BaseService):
    """
    Plan selection. Only the free tier is handled here; paid plans go through
    the payment provider's hosted checkout and are rejected with
    ``paid_plan_requires_checkout``.
    """

    @staticmethod
    def is_free_plan(plan: str) -> bool:
        name = (plan or "").lower()
        return any(keyword in name for keyword in FREE_PLAN_KEYWORDS)

    @BaseService.log_performance
    def select_plan(self, user, plan: str, interval: str = None) -> ServiceResult:
        if not plan:
            return service_err(ErrorCodes.INVALID_INPUT, "Plan is required")
        if interval is not None and interval not in BILLING_INTERVALS:
            return service_err(ErrorCodes.INVALID_INPUT, "Billing interval must be 'monthly' or 'yearly'")
        if not self.is_free_plan(plan):
            return service_err(ErrorCodes.PAID_PLAN_REQUIRES_CHECKOUT, "Paid plan requires Stripe checkout")

        try:
            user.subscription_tier = FREE_TIER_NAME
            user.is_subscribed = False
            user.subscription_billing_interval = interval
            user.subscription_start_date = None
            user.subscription_end_date = None
            user.save(
                update_fields=[
                    "subscription_tier",
                    "is_subscribed",
                    "subscription_billing_interval",
                    "subscription_start_date",
                    "subscription_end_date",
                ]
            )
            self.logger.info(f"User {user.pk} switched to the {FREE_TIER_NAME} plan")
            return service_ok(user)
        except Exception as e:
            self.logger.error(f"Error selecting plan for {user.pk}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))
