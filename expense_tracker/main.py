# expense_tracker/main.py

import logging
from typing import List

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import accounts, auth, config, crud
from .database import Base, engine, get_db
from .exceptions import ServerError, TrackerError
from .models import User
from .schemas import AmountIn, BudgetOut, ExpenseIn, ExpenseOut, MessageOut

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="expense-tracker")

# Create tables if not already created
Base.metadata.create_all(bind=engine)
config.warn_if_insecure()

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# Include auth routes (register/login/me)
app.include_router(auth.router)


@app.exception_handler(TrackerError)
async def tracker_error_handler(request: Request, exc: TrackerError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.debug("Rejected request body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid request body."})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    err = ServerError()
    return JSONResponse(status_code=err.status_code, content={"error": err.message})


@app.get("/")
def health():
    return {"status": "ok"}


# Budget

@app.put("/budget/set", response_model=BudgetOut)
def set_budget(body: AmountIn, user: User = Depends(auth.get_current_user), db: Session = Depends(get_db)):
    total = accounts.set_budget(db, user, body.amount)
    return {"message": "Budget updated.", "budget": total}


@app.put("/budget/add", response_model=BudgetOut)
def add_to_budget(body: AmountIn, user: User = Depends(auth.get_current_user), db: Session = Depends(get_db)):
    total = accounts.add_to_budget(db, user, body.amount)
    return {"message": "Money added to budget.", "budget": total}


# Expenses

@app.get("/expenses", response_model=List[ExpenseOut])
def list_expenses(user: User = Depends(auth.get_current_user), db: Session = Depends(get_db)):
    return [crud.expense_view(e) for e in crud.list_expenses(user.id, db)]


@app.post("/expenses", response_model=ExpenseOut, status_code=status.HTTP_201_CREATED)
def add_expense(body: ExpenseIn, user: User = Depends(auth.get_current_user), db: Session = Depends(get_db)):
    expense = crud.add_expense(
        user_id=user.id,
        date=body.date,
        item=body.item,
        amount=body.amount,
        quantity=body.quantity,
        mode=body.mode,
        db=db,
    )
    return crud.expense_view(expense)


@app.delete("/expenses/{expense_id}", response_model=MessageOut)
def delete_expense(expense_id: str, user: User = Depends(auth.get_current_user), db: Session = Depends(get_db)):
    crud.remove_expense(user.id, expense_id, db)
    return {"message": "Expense deleted."}


@app.delete("/expenses", response_model=MessageOut)
def clear_expenses(user: User = Depends(auth.get_current_user), db: Session = Depends(get_db)):
    crud.clear_ledger(user, db)
    return {"message": "All data cleared."}
