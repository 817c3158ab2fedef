"""
License query handlers.

Handlers for reading single licenses and license listings.
"""
from activations.application.dto.activation_dto import ActivationDTO
from activations.ports.activation_repository import ActivationRepository
from core.domain.exceptions import LicenseNotFoundError
from licenses.application.dto.license_dto import LicenseDTO, LicenseListDTO
from licenses.application.queries.get_license import GetLicenseQuery
from licenses.application.queries.list_licenses import (
    ListCustomerLicensesQuery,
    ListLicensesQuery,
)
from licenses.domain.services import LicenseStatusPolicy
from licenses.ports.license_repository import LicenseRepository

MAX_PAGE_SIZE = 200


class GetLicenseHandler:
    """Handler for GetLicenseQuery."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        activation_repository: ActivationRepository,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.activation_repository = activation_repository

    async def handle(self, query: GetLicenseQuery) -> LicenseDTO:
        """
        Handle get license query.

        Args:
            query: GetLicenseQuery

        Returns:
            LicenseDTO including activations

        Raises:
            LicenseNotFoundError: If license not found
        """
        license = await self.license_repository.find_by_id(query.license_id)
        if not license:
            raise LicenseNotFoundError(f"License {query.license_id} not found")

        activations = await self.activation_repository.find_by_license(license.id)
        return LicenseDTO.from_entity(
            license,
            activation_count=len(activations),
            activations=[ActivationDTO.from_entity(a) for a in activations],
        )


class ListLicensesHandler:
    """Handler for ListLicensesQuery."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repositories."""
        self.license_repository = license_repository

    async def handle(self, query: ListLicensesQuery) -> LicenseListDTO:
        """
        Handle list licenses query.

        Args:
            query: ListLicensesQuery

        Returns:
            LicenseListDTO with pagination data
        """
        if query.status:
            LicenseStatusPolicy.parse_status(query.status)
        page = max(query.page, 1)
        page_size = min(max(query.page_size, 1), MAX_PAGE_SIZE)

        rows, total = await self.license_repository.list_with_activation_counts(
            status=query.status,
            customer_id=query.customer_id,
            product_id=query.product_id,
            offset=(page - 1) * page_size,
            limit=page_size,
        )
        return LicenseListDTO(
            licenses=[
                LicenseDTO.from_entity(license, activation_count=count)
                for license, count in rows
            ],
            page=page,
            limit=page_size,
            total=total,
        )


class ListCustomerLicensesHandler:
    """Handler for ListCustomerLicensesQuery."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repositories."""
        self.license_repository = license_repository

    async def handle(self, query: ListCustomerLicensesQuery) -> LicenseListDTO:
        rows, total = await self.license_repository.list_with_activation_counts(
            customer_id=query.customer_id,
            offset=0,
            limit=MAX_PAGE_SIZE,
        )
        return LicenseListDTO(
            licenses=[
                LicenseDTO.from_entity(license, activation_count=count)
                for license, count in rows
            ],
            page=1,
            limit=MAX_PAGE_SIZE,
            total=total,
        )
