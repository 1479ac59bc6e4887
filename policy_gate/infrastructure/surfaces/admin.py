"""Platform admin console: A-prefixed codes; SUPER_ADMIN holds every permission."""

from policy_gate.application.services.permission_service import PermissionRegistry
from policy_gate.application.services.role_service import RolePermissionTable
from policy_gate.domain.enums import ClientSurface, ErrorKind, Role
from policy_gate.infrastructure.messages.catalog import MessageCatalog
from policy_gate.infrastructure.surfaces.base import SurfaceProfile, message

CODES = {
    ErrorKind.SYSTEM_ERROR: "A1001",
    ErrorKind.VALIDATION_FAILED: "A1002",
    ErrorKind.MISSING_REQUIRED_FIELD: "A1006",
    ErrorKind.UNAUTHENTICATED: "A2001",
    ErrorKind.UNAUTHORIZED: "A2002",
    ErrorKind.TOKEN_EXPIRED: "A2003",
    ErrorKind.ACCOUNT_SUSPENDED: "A2004",
    ErrorKind.ACCOUNT_TERMINATED: "A2005",
    ErrorKind.INVALID_TOKEN: "A2006",
    ErrorKind.INSUFFICIENT_PERMISSIONS: "A2009",
    ErrorKind.PHONE_NOT_VERIFIED: "A2012",
    ErrorKind.TENANT_ACCESS_DENIED: "A3008",
}

_VIEW_PERMISSIONS = ("VIEW_STORES", "VIEW_USERS", "VIEW_ORDERS", "VIEW_ANALYTICS")

ROLE_PERMISSIONS = {
    Role.ADMIN: _VIEW_PERMISSIONS + ("MANAGE_STORES", "MANAGE_USERS", "MANAGE_ORDERS"),
    Role.VIEWER: _VIEW_PERMISSIONS,
}

ACTION_PERMISSIONS = {
    "list_stores": ["VIEW_STORES"],
    "approve_store": ["MANAGE_STORES"],
    "suspend_store": ["MANAGE_STORES"],
    "list_users": ["VIEW_USERS"],
    "suspend_user": ["MANAGE_USERS"],
    "list_orders": ["VIEW_ORDERS"],
    "cancel_order": ["MANAGE_ORDERS"],
    "platform_analytics": ["VIEW_ANALYTICS"],
    "create_admin": ["MANAGE_ADMINS"],
}

ERROR_MESSAGES = MessageCatalog(
    {
        "A1001": message(
            "[A1001]SYSTEM_ERROR",
            "Đã xảy ra lỗi hệ thống.",
            "A system error occurred.",
            "시스템 오류가 발생했습니다.",
        ),
        "A1002": message(
            "[A1002]VALIDATION_FAILED",
            "Dữ liệu không hợp lệ.",
            "The submitted data is invalid.",
            "입력 데이터가 올바르지 않습니다.",
        ),
        "A1006": message(
            "[A1006]MISSING_REQUIRED_FIELD",
            "Thiếu trường bắt buộc.",
            "A required field is missing.",
            "필수 입력 항목이 누락되었습니다.",
        ),
        "A2001": message(
            "[A2001]UNAUTHENTICATED",
            "Vui lòng đăng nhập với tài khoản quản trị.",
            "Please log in with an administrator account.",
            "관리자 로그인이 필요합니다.",
        ),
        "A2002": message(
            "[A2002]UNAUTHORIZED",
            "Bạn không có quyền quản trị cho thao tác này.",
            "You are not authorized to perform this admin action.",
            "이 관리 작업을 수행할 권한이 없습니다.",
        ),
        "A2003": message(
            "[A2003]TOKEN_EXPIRED",
            "Phiên quản trị đã hết hạn.",
            "Your admin session has expired.",
            "관리자 세션이 만료되었습니다.",
        ),
        "A2004": message(
            "[A2004]ACCOUNT_SUSPENDED",
            "Tài khoản quản trị đã bị tạm ngưng.",
            "This admin account has been suspended.",
            "정지된 관리자 계정입니다.",
        ),
        "A2005": message(
            "[A2005]ACCOUNT_TERMINATED",
            "Tài khoản quản trị đã bị chấm dứt.",
            "This admin account has been terminated.",
            "해지된 관리자 계정입니다.",
        ),
        "A2006": message(
            "[A2006]INVALID_TOKEN",
            "Token quản trị không hợp lệ.",
            "The admin access token is invalid.",
            "유효하지 않은 관리자 토큰입니다.",
        ),
        "A2009": message(
            "[A2009]INSUFFICIENT_PERMISSIONS",
            "Bạn không đủ quyền hạn quản trị.",
            "You do not have sufficient admin permissions.",
            "관리자 권한이 부족합니다.",
        ),
        "A2012": message(
            "[A2012]PHONE_NOT_VERIFIED",
            "Số điện thoại chưa được xác thực.",
            "Your phone number has not been verified.",
            "전화번호 인증이 필요합니다.",
        ),
        "A3008": message(
            "[A3008]TENANT_ACCESS_DENIED",
            "Bạn không có quyền truy cập tài nguyên này.",
            "You do not have access to this resource.",
            "이 리소스에 접근할 권한이 없습니다.",
        ),
    },
    fallback_code="A1001",
)

SUCCESS_MESSAGES = MessageCatalog(
    {
        "AS000": message(
            "OPERATION_SUCCESSFUL",
            "Thao tác thành công",
            "Operation completed successfully",
            "작업이 완료되었습니다",
        ),
        "AS201": message(
            "USER_CREATED",
            "Tạo người dùng thành công",
            "User created successfully",
            "사용자가 생성되었습니다",
        ),
        "AS202": message(
            "USER_UPDATED",
            "Cập nhật người dùng thành công",
            "User updated successfully",
            "사용자가 업데이트되었습니다",
        ),
        "AS204": message(
            "USER_SUSPENDED",
            "Tạm ngưng người dùng thành công",
            "User suspended successfully",
            "사용자가 정지되었습니다",
        ),
    },
    fallback_code="AS000",
)

PROFILE = SurfaceProfile(
    surface=ClientSurface.ADMIN,
    prefix="A",
    codes=CODES,
    role_table=RolePermissionTable(ROLE_PERMISSIONS, grants_all=(Role.SUPER_ADMIN,)),
    permission_registry=PermissionRegistry(ACTION_PERMISSIONS),
    error_catalog=ERROR_MESSAGES,
    success_catalog=SUCCESS_MESSAGES,
)
