"""Product service for business logic"""

from typing import AsyncIterator, List, Optional

from aiokafka.errors import KafkaError  # type: ignore
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import ResourceNotFoundError
from ..events.event_producers import ProductEventProducer
from ..events.multicast import MulticastSink
from ..models.product import Product
from ..repository.category_repository import CategoryRepository
from ..repository.product_repository import ProductRepository
from ..schemas.product import ProductCreate, ProductUpdate
from ..utils.logging import setup_product_logging as setup_logging

# Setup structured logging for the service
logger = setup_logging("product_service.product_service")


class ProductService:
    """
    Service class for product business logic.

    Every successful mutation is persisted first, then announced on the
    product topic and, for creates and updates, pushed to the in-process
    subscription sinks.
    """

    def __init__(
        self,
        db: AsyncSession,
        event_producer: Optional[ProductEventProducer] = None,
        created_sink: Optional[MulticastSink[Product]] = None,
        updated_sink: Optional[MulticastSink[Product]] = None,
    ):
        self.db = db
        self.repository = ProductRepository(db)
        self.category_repository = CategoryRepository(db)
        self.event_producer = event_producer
        self.created_sink = created_sink or MulticastSink("product-created")
        self.updated_sink = updated_sink or MulticastSink("product-updated")

    async def find_all_products(self) -> List[Product]:
        return await self.repository.find_all()

    async def find_product_by_id(self, product_id: int) -> Product:
        product = await self.repository.find_by_id(product_id)
        if product is None:
            raise ResourceNotFoundError(f"Product not found with id: {product_id}")
        return product

    async def find_products_by_category_id(self, category_id: int) -> List[Product]:
        if not await self.category_repository.exists_by_id(category_id):
            raise ResourceNotFoundError(f"Category not found with id: {category_id}")
        return await self.repository.find_by_category_id(category_id)

    async def create_product(self, product_data: ProductCreate) -> Product:
        """Create a product, announce it and push it to subscribers"""
        await self._require_category(product_data.category_id)

        product = await self.repository.create(product_data)
        logger.info(
            "Product created successfully",
            extra={"product_id": product.id, "category_id": product.category_id},
        )

        await self._send_event("created", product.id)
        self.created_sink.emit(product)
        return product

    async def update_product(
        self, product_id: int, product_data: ProductUpdate
    ) -> Product:
        """Update the provided fields of a product"""
        product = await self.find_product_by_id(product_id)
        if product_data.category_id is not None:
            await self._require_category(product_data.category_id)

        product = await self.repository.update(product, product_data)
        logger.info(
            "Product updated successfully",
            extra={
                "product_id": product_id,
                "updated_fields": list(product_data.model_dump(exclude_none=True)),
            },
        )

        await self._send_event("updated", product.id)
        self.updated_sink.emit(product)
        return product

    async def delete_product(self, product_id: int) -> bool:
        if not await self.repository.exists_by_id(product_id):
            raise ResourceNotFoundError(f"Product not found with id: {product_id}")

        await self.repository.delete_by_id(product_id)
        logger.info("Product deleted successfully", extra={"product_id": product_id})

        await self._send_event("deleted", product_id)
        return True

    # Subscription streams

    def product_created_stream(self) -> AsyncIterator[Product]:
        return self.created_sink.subscribe()

    def product_updated_stream(self) -> AsyncIterator[Product]:
        return self.updated_sink.subscribe()

    async def _require_category(self, category_id: int) -> None:
        if not await self.category_repository.exists_by_id(category_id):
            raise ResourceNotFoundError(f"Category not found with id: {category_id}")

    async def _send_event(self, action: str, product_id: int) -> None:
        if self.event_producer is None:
            logger.info(
                f"Kafka disabled: Skipping product {action} event "
                f"for product id: {product_id}",
                extra={"product_id": product_id},
            )
            return

        publish = getattr(self.event_producer, f"publish_product_{action}")
        try:
            await publish(product_id)
        except KafkaError as e:
            # The change is committed at this point
            logger.error(
                f"Failed to send product {action} event",
                extra={"product_id": product_id, "error": str(e)},
                exc_info=True,
            )
