"""FastAPI endpoints for the Identity domain."""

from fastapi import APIRouter, Depends, Query, Request
from protean.utils.globals import current_domain

from identity.api.dependencies import current_principal, require_admin
from identity.api.schemas import (
    AddressBookResponse,
    AddressRequest,
    AuthResponse,
    CustomerCountsResponse,
    CustomerDetailResponse,
    CustomerListResponse,
    LoginRequest,
    RegisterRequest,
    UpdateAddressRequest,
    UpdateProfileRequest,
    UserResponse,
)
from identity.user.addresses import AddAddress, RemoveAddress, UpdateAddress
from identity.user.credentials import Principal, authenticate, issue_credential
from identity.user.profile import UpdateProfile
from identity.user.queries import CustomerFilter, customer_statistics, get_customer, list_customers
from identity.user.registration import RegisterUser
from identity.user.user import User

auth_router = APIRouter(prefix="/auth", tags=["auth"])
customer_router = APIRouter(prefix="/customers", tags=["customers"])


# --- Auth endpoints ---


@auth_router.post("/register", status_code=201, response_model=AuthResponse)
async def register(body: RegisterRequest) -> AuthResponse:
    command = RegisterUser(
        name=body.name,
        email=body.email,
        password=body.password,
        phone=body.phone,
    )
    user_id = current_domain.process(command, asynchronous=False)
    user = current_domain.repository_for(User).get(user_id)
    return AuthResponse(user=UserResponse.from_user(user), token=issue_credential(user))


@auth_router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest) -> AuthResponse:
    user = authenticate(body.email, body.password)
    return AuthResponse(user=UserResponse.from_user(user), token=issue_credential(user))


@auth_router.get("/me", response_model=UserResponse)
async def get_profile(principal: Principal = Depends(current_principal)) -> UserResponse:
    user = current_domain.repository_for(User).get(principal.user_id)
    return UserResponse.from_user(user)


@auth_router.put("/me", response_model=UserResponse)
async def update_profile(body: UpdateProfileRequest, principal: Principal = Depends(current_principal)) -> UserResponse:
    command = UpdateProfile(user_id=principal.user_id, name=body.name, phone=body.phone)
    current_domain.process(command, asynchronous=False)
    user = current_domain.repository_for(User).get(principal.user_id)
    return UserResponse.from_user(user)


@auth_router.post("/addresses", status_code=201, response_model=AddressBookResponse)
async def add_address(body: AddressRequest, principal: Principal = Depends(current_principal)) -> AddressBookResponse:
    command = AddAddress(user_id=principal.user_id, **body.model_dump())
    current_domain.process(command, asynchronous=False)
    return AddressBookResponse.from_user(current_domain.repository_for(User).get(principal.user_id))


@auth_router.put("/addresses/{address_id}", response_model=AddressBookResponse)
async def update_address(
    address_id: str,
    body: UpdateAddressRequest,
    principal: Principal = Depends(current_principal),
) -> AddressBookResponse:
    command = UpdateAddress(user_id=principal.user_id, address_id=address_id, **body.model_dump(exclude_none=True))
    current_domain.process(command, asynchronous=False)
    return AddressBookResponse.from_user(current_domain.repository_for(User).get(principal.user_id))


@auth_router.delete("/addresses/{address_id}", response_model=AddressBookResponse)
async def delete_address(address_id: str, principal: Principal = Depends(current_principal)) -> AddressBookResponse:
    current_domain.process(RemoveAddress(user_id=principal.user_id, address_id=address_id), asynchronous=False)
    return AddressBookResponse.from_user(current_domain.repository_for(User).get(principal.user_id))


# --- Customer administration endpoints ---


@customer_router.get("", response_model=CustomerListResponse)
async def get_customers(
    search: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    _: Principal = Depends(require_admin),
) -> CustomerListResponse:
    result = list_customers(CustomerFilter(search=search), page=page, limit=limit)
    return CustomerListResponse(
        items=[UserResponse.from_user(user) for user in result.items],
        pagination=result.meta(),
    )


@customer_router.get("/stats", response_model=CustomerCountsResponse)
async def get_customer_stats(_: Principal = Depends(require_admin)) -> CustomerCountsResponse:
    return CustomerCountsResponse(**customer_statistics())


@customer_router.get("/{customer_id}", response_model=CustomerDetailResponse)
async def get_customer_details(
    customer_id: str,
    request: Request,
    _: Principal = Depends(require_admin),
) -> CustomerDetailResponse:
    from ordering.api.schemas import OrderResponse

    customer = get_customer(customer_id)
    summary = request.app.state.workflow.customer_summary(str(customer.id))
    return CustomerDetailResponse(
        customer=UserResponse.from_user(customer),
        orders=[OrderResponse.from_order(order).model_dump(mode="json") for order in summary["recent_orders"]],
        statistics={
            "total_orders": summary["total_orders"],
            "total_spent": summary["total_spent"],
        },
    )
