from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from checkout.config import settings
from checkout.core.exceptions import CheckoutError
import logging

# ====================================
# IMPORTS DAS ROTAS
# ====================================
from checkout.api import transacoes
from checkout.api import webhook


# Configurar logs
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)

# Criar aplicação FastAPI
app = FastAPI(
    title="PIX Checkout API",
    description="Checkout PIX da loja: criação de transações na LiraPay, consulta de status e webhook",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    redirect_slashes=False
)

# Configurar CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ====================================
# ERROS
# ====================================

@app.exception_handler(CheckoutError)
async def checkout_error_handler(request: Request, exc: CheckoutError):
    """Converte qualquer CheckoutError em {hasError: true, message}"""
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())

# ====================================
# INCLUIR ROTAS
# ====================================

app.include_router(
    transacoes.router,
    prefix="/api",
    tags=["Transações"]
)

app.include_router(
    webhook.router,
    prefix="/api",
    tags=["Webhook"]
)

# ====================================
# HEALTH CHECK
# ====================================

@app.get("/")
async def health_check():
    """Health check"""
    return {"status": "ok", "service": "pix-checkout-api"}

# ====================================
# EVENTOS
# ====================================

@app.on_event("startup")
async def startup_event():
    """
    Executado quando a aplicação inicia
    """
    logger.info("🚀 Iniciando PIX Checkout API")
    logger.info(f"📦 Ambiente: {settings.ENVIRONMENT}")
    logger.info(f"💳 LiraPay URL: {settings.LIRAPAY_BASE_URL}")
    logger.info(f"🌐 CORS Origins: {settings.cors_origins_list}")
    if not settings.LIRAPAY_API_SECRET:
        logger.warning("⚠️  LIRAPAY_API_SECRET não configurado - as rotas de transação vão responder 500")


@app.on_event("shutdown")
async def shutdown_event():
    """
    Executado quando a aplicação é desligada
    """
    logger.info("🔴 Desligando PIX Checkout API")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("checkout.main:app", host=settings.HOST, port=settings.PORT)
