"""Mixed workload scenario.

Combines the account, address-book and ordering journeys with weights that
model storefront traffic. This is the recommended scenario for a load
baseline.
"""

from locust import HttpUser, between

from loadtests.scenarios.identity import AccountJourney, AddressBookJourney, RegionBrowser
from loadtests.scenarios.ordering import CancellationJourney, CheckoutAndPayJourney


class MixedWorkloadUser(HttpUser):
    """Realistic mixed workload.

    Accounts (35%): sign-up and sign-in are the most common writes.
    Address book and regions (25%): form traffic before checkout.
    Ordering (40%): checkout and pay, with occasional cancellations.

    Requests alternate between the identity and ordering domains, which
    exercises the per-request domain context middleware under load.
    """

    wait_time = between(0.5, 3.0)
    tasks = {
        AccountJourney: 7,
        AddressBookJourney: 3,
        RegionBrowser: 2,
        CheckoutAndPayJourney: 6,
        CancellationJourney: 2,
    }
