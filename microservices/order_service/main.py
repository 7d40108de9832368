"""
Order Microservice

Responsibilities:
- Accept order submissions and return priced results
- Record orders in the operational and history tables
- Publish new-order and refund notifications
- Refund completed orders
"""

from fastapi import FastAPI, HTTPException, Depends, Request, Response, status, Path, Body
from fastapi.responses import JSONResponse
import uvicorn
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from core.config import OrderServiceConfig
from core.logger import setup_service_logger

from .factory import (
    create_notifier_client,
    create_order_handler,
    create_order_repository,
    create_refund_processor,
    create_store_client,
)
from .models import RefundErrorCode, RefundRequest
from .protocols import NotifierClientProtocol, StoreClientProtocol, StoreError

logger = setup_service_logger("order_service")

REFUND_STATUS_CODES = {
    RefundErrorCode.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    RefundErrorCode.ORDER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    RefundErrorCode.INVALID_STATUS: status.HTTP_409_CONFLICT,
    RefundErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    RefundErrorCode.STORE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    RefundErrorCode.NOTIFY_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class OrderMicroservice:
    """Order microservice core class"""

    def __init__(
        self,
        config: Optional[OrderServiceConfig] = None,
        store_client: Optional[StoreClientProtocol] = None,
        notifier_client: Optional[NotifierClientProtocol] = None,
    ):
        self.config = config
        self.store_client = store_client
        self.notifier_client = notifier_client
        self.order_handler = None
        self.refund_processor = None
        self.repository = None

    async def initialize(self):
        """Resolve configuration and build components; ConfigurationError is fatal"""
        if self.config is None:
            self.config = OrderServiceConfig.from_env()
        if self.store_client is None:
            self.store_client = await create_store_client(self.config)
        if self.notifier_client is None:
            self.notifier_client = create_notifier_client(self.config)

        self.order_handler = create_order_handler(self.config, self.store_client, self.notifier_client)
        self.refund_processor = create_refund_processor(self.config, self.store_client, self.notifier_client)
        self.repository = create_order_repository(self.config, self.store_client)
        logger.info("Order microservice initialized")

    async def shutdown(self):
        """Close collaborators that hold connections"""
        for client in (self.store_client, self.notifier_client):
            close = getattr(client, "close", None)
            if close is not None:
                await close()
        logger.info("Order microservice shutdown completed")


def create_app(
    config: Optional[OrderServiceConfig] = None,
    store_client: Optional[StoreClientProtocol] = None,
    notifier_client: Optional[NotifierClientProtocol] = None,
) -> FastAPI:
    """Create the FastAPI application"""
    order_microservice = OrderMicroservice(config, store_client, notifier_client)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await order_microservice.initialize()
        app.state.order_microservice = order_microservice
        yield
        await order_microservice.shutdown()

    app = FastAPI(
        title="Order Service",
        description="Order submission, pricing and refund microservice",
        version="1.0.0",
        lifespan=lifespan
    )
    _register_routes(app)
    return app


# Dependency injection
def get_order_microservice(request: Request) -> OrderMicroservice:
    """Get order microservice instance"""
    microservice = getattr(request.app.state, "order_microservice", None)
    if microservice is None or microservice.order_handler is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Order service not initialized"
        )
    return microservice


def _register_routes(app: FastAPI) -> None:

    @app.get("/health")
    async def health_check(microservice: OrderMicroservice = Depends(get_order_microservice)):
        """Service health check"""
        return {
            "status": "healthy",
            "service": microservice.config.service_name,
            "version": "1.0.0",
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

    @app.post("/api/v1/orders")
    async def create_order(
        request: Request,
        microservice: OrderMicroservice = Depends(get_order_microservice)
    ):
        """Submit a new order; the raw body is validated by the handler"""
        raw_body = await request.body()
        result = await microservice.order_handler.handle(raw_body)
        return Response(content=result.body, status_code=result.status_code, media_type="application/json")

    @app.get("/api/v1/orders/{order_id}")
    async def get_order(
        order_id: str = Path(..., description="Order ID"),
        microservice: OrderMicroservice = Depends(get_order_microservice)
    ):
        """Get current order state from the orders table"""
        try:
            order = await microservice.repository.get_order(order_id)
        except StoreError as e:
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
        if order is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
        return order.to_item()

    @app.post("/api/v1/orders/{order_id}/refund")
    async def refund_order(
        order_id: str = Path(..., description="Order ID"),
        request: RefundRequest = Body(...),
        microservice: OrderMicroservice = Depends(get_order_microservice)
    ):
        """Refund a completed order"""
        result = await microservice.refund_processor.refund(order_id, request.user_id, request.amount)
        content = {"success": result.success}
        if result.reason:
            content["reason"] = result.reason
        if result.error_code:
            content["error_code"] = result.error_code.value
        if result.order:
            content["order"] = result.order.to_item()
        status_code = status.HTTP_200_OK if result.success else REFUND_STATUS_CODES[result.error_code]
        return JSONResponse(status_code=status_code, content=content)


app = create_app()


if __name__ == "__main__":
    config = OrderServiceConfig.from_env()
    uvicorn.run(
        "microservices.order_service.main:app",
        host=config.service_host,
        port=config.service_port,
        reload=config.debug,
    )
