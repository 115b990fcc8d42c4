"""
Address Recorder.

Persists the billing address (and the delivery address when it differs)
for the resolved account. Country and region names are matched loosely and
fall back to store defaults so checkout is never blocked by reference data.
"""
from dataclasses import dataclass
from typing import Optional, Tuple
import logging

from core.application.dtos.checkout_dto import AddressInput, PlaceOrderRequest
from core.data.uow import UnitOfWork
from core.domain.entities.account import Address
from core.domain.enums import AddressKind


logger = logging.getLogger(__name__)


@dataclass
class RecordedAddresses:
    billing_address_id: int
    delivery_address_id: Optional[int] = None


class AddressRecorder:
    """Record checkout addresses inside the order transaction."""

    async def record(
        self,
        uow: UnitOfWork,
        account_id: int,
        request: PlaceOrderRequest,
    ) -> RecordedAddresses:
        """
        Persist billing and optional delivery addresses.

        Args:
            uow: Open unit of work
            account_id: Resolved account id
            request: Normalized checkout request

        Returns:
            RecordedAddresses with the new ids
        """
        country_id, region_id = await self._resolve_location(uow, request.billing)
        billing = await uow.addresses.add(
            self._to_address(account_id, AddressKind.BILLING, request, request.billing, country_id, region_id)
        )

        delivery_id = None
        if not request.same_as_billing and request.shipping is not None:
            ship_country, ship_region = await self._resolve_location(
                uow, request.shipping, fallback=(country_id, region_id)
            )
            delivery = await uow.addresses.add(
                self._to_address(account_id, AddressKind.DELIVERY, request, request.shipping, ship_country, ship_region)
            )
            delivery_id = delivery.id

        logger.info(
            f"[{uow.execution_id}] Addresses recorded for account {account_id} "
            f"(billing={billing.id}, delivery={delivery_id})"
        )
        return RecordedAddresses(billing_address_id=billing.id, delivery_address_id=delivery_id)

    async def _resolve_location(
        self,
        uow: UnitOfWork,
        address: AddressInput,
        fallback: Optional[Tuple[Optional[int], Optional[int]]] = None,
    ) -> Tuple[Optional[int], Optional[int]]:
        """
        Match country and region names.

        Misses fall back to `fallback` when given (delivery uses the billing
        location), otherwise to the first country/region in the store.
        """
        country_id = await uow.locations.find_country_id(address.country)
        if country_id is None:
            if fallback is not None and fallback[0] is not None:
                country_id = fallback[0]
            else:
                country_id = await uow.locations.first_country_id()
            logger.warning(
                f"[{uow.execution_id}] Country '{address.country}' not found, using {country_id}"
            )

        region_id = await uow.locations.find_region_id(country_id, address.state)
        if region_id is None:
            if fallback is not None and fallback[1] is not None:
                region_id = fallback[1]
            else:
                region_id = await uow.locations.first_region_id(country_id)
                if region_id is None:
                    region_id = await uow.locations.first_region_id()
            logger.warning(
                f"[{uow.execution_id}] Region '{address.state}' not found, using {region_id}"
            )

        return country_id, region_id

    @staticmethod
    def _to_address(
        account_id: int,
        kind: AddressKind,
        request: PlaceOrderRequest,
        address: AddressInput,
        country_id: Optional[int],
        region_id: Optional[int],
    ) -> Address:
        return Address(
            account_id=account_id,
            kind=kind,
            name=address.name or request.full_name,
            line1=address.line1,
            line2=address.line2,
            city=address.city,
            postal_code=address.postal_code,
            phone=address.phone or request.phone,
            country_id=country_id,
            region_id=region_id,
            is_default=True,
        )
