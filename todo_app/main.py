import logging
import os
import time

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from todo_app.api.page import router as page_router
from todo_app.api.todo import router as todo_router
from todo_app.db import close_engine
from todo_app.init_db import init_database
from todo_app.service.todo_service import TodoNotFoundError, StoreFailureError

load_dotenv()


def get_log_level(name) -> int:
    """LOG_LEVEL 写错时退回 INFO"""
    level = logging.getLevelName((name or "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


logging.basicConfig(level=get_log_level(os.getenv("LOG_LEVEL")))
logger = logging.getLogger(__name__)


app = FastAPI(title="Todo Service")

cors_origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 注册路由
app.include_router(todo_router)
app.include_router(page_router)


@app.on_event("startup")
def startup_event():
    """应用启动时建表"""
    logger.info("🚀 应用启动中...")
    init_database()


@app.on_event("shutdown")
def shutdown_event():
    close_engine()


@app.exception_handler(TodoNotFoundError)
async def todo_not_found_handler(request: Request, exc: TodoNotFoundError):
    return JSONResponse(status_code=404, content={"error": "Todo not found"})


@app.exception_handler(StoreFailureError)
async def store_failure_handler(request: Request, exc: StoreFailureError):
    # 详细错误已在 service 层记录
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={"error": "Invalid request", "detail": jsonable_encoder(exc.errors())},
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    try:
        response = await call_next(request)
        process_time = time.time() - start_time
        logger.info(
            f"{request.method} {request.url.path} | 响应状态: {response.status_code} | 耗时: {process_time:.4f}s"
        )
        return response
    except Exception as e:
        logger.error(f"请求处理异常: {e}")
        raise


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("todo_app.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "3000")))
