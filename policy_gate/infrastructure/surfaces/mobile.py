"""Consumer mobile app: M-prefixed codes; guests allowed on browse actions."""

from policy_gate.application.services.permission_service import PermissionRegistry
from policy_gate.application.services.role_service import RolePermissionTable
from policy_gate.domain.enums import ClientSurface, ErrorKind, Role
from policy_gate.infrastructure.messages.catalog import MessageCatalog
from policy_gate.infrastructure.surfaces.base import SurfaceProfile, message

CODES = {
    ErrorKind.SYSTEM_ERROR: "M1001",
    ErrorKind.VALIDATION_FAILED: "M1002",
    ErrorKind.MISSING_REQUIRED_FIELD: "M1006",
    ErrorKind.UNAUTHENTICATED: "M2001",
    ErrorKind.INVALID_TOKEN: "M2002",
    ErrorKind.TOKEN_EXPIRED: "M2003",
    ErrorKind.UNAUTHORIZED: "M2004",
    ErrorKind.ACCOUNT_SUSPENDED: "M2005",
    ErrorKind.ACCOUNT_TERMINATED: "M2006",
    ErrorKind.INSUFFICIENT_PERMISSIONS: "M2009",
    ErrorKind.PHONE_NOT_VERIFIED: "M2012",
    ErrorKind.TENANT_ACCESS_DENIED: "M5009",
}

# Customers hold no permission codes; mobile actions gate on role and phone verification.
ROLE_PERMISSIONS = {Role.CUSTOMER: ()}

ERROR_MESSAGES = MessageCatalog(
    {
        "M1001": message(
            "[M1001]SYSTEM_ERROR",
            "Đã xảy ra lỗi. Vui lòng thử lại.",
            "Something went wrong. Please try again.",
            "오류가 발생했습니다. 다시 시도해주세요.",
        ),
        "M1002": message(
            "[M1002]VALIDATION_FAILED",
            "Thông tin không hợp lệ.",
            "Some information is invalid.",
            "입력 정보가 올바르지 않습니다.",
        ),
        "M1006": message(
            "[M1006]MISSING_REQUIRED_FIELD",
            "Vui lòng nhập đầy đủ thông tin.",
            "Please fill in all required information.",
            "필수 정보를 입력해주세요.",
        ),
        "M2001": message(
            "[M2001]UNAUTHENTICATED",
            "Vui lòng đăng nhập để tiếp tục.",
            "Please log in to continue.",
            "계속하려면 로그인해주세요.",
        ),
        "M2002": message(
            "[M2002]INVALID_TOKEN",
            "Phiên đăng nhập không hợp lệ.",
            "Your login session is invalid.",
            "유효하지 않은 로그인 세션입니다.",
        ),
        "M2003": message(
            "[M2003]TOKEN_EXPIRED",
            "Phiên đăng nhập đã hết hạn.",
            "Your login session has expired.",
            "로그인 세션이 만료되었습니다.",
        ),
        "M2004": message(
            "[M2004]UNAUTHORIZED",
            "Bạn không thể thực hiện thao tác này.",
            "You cannot perform this action.",
            "이 작업을 수행할 수 없습니다.",
        ),
        "M2005": message(
            "[M2005]ACCOUNT_SUSPENDED",
            "Tài khoản của bạn đã bị tạm khóa.",
            "Your account has been suspended.",
            "계정이 일시 정지되었습니다.",
        ),
        "M2006": message(
            "[M2006]ACCOUNT_TERMINATED",
            "Tài khoản của bạn đã bị xóa.",
            "Your account has been closed.",
            "해지된 계정입니다.",
        ),
        "M2009": message(
            "[M2009]INSUFFICIENT_PERMISSIONS",
            "Bạn không đủ quyền thực hiện thao tác này.",
            "You do not have permission for this action.",
            "이 작업에 대한 권한이 없습니다.",
        ),
        "M2012": message(
            "[M2012]PHONE_NOT_VERIFIED",
            "Vui lòng xác thực số điện thoại.",
            "Please verify your phone number.",
            "전화번호 인증을 완료해주세요.",
        ),
        "M5009": message(
            "[M5009]TENANT_ACCESS_DENIED",
            "Cửa hàng không khớp với đơn hàng.",
            "The store does not match this order.",
            "주문한 매장과 일치하지 않습니다.",
        ),
    },
    fallback_code="M1001",
)

SUCCESS_MESSAGES = MessageCatalog(
    {
        "MS000": message(
            "OPERATION_SUCCESSFUL",
            "Thành công",
            "Success",
            "완료되었습니다",
        ),
        "MS001": message(
            "PROFILE_UPDATED",
            "Cập nhật hồ sơ thành công",
            "Profile updated successfully",
            "프로필이 업데이트되었습니다",
        ),
        "MS010": message(
            "ORDER_PLACED",
            "Đặt hàng thành công",
            "Order placed successfully",
            "주문이 완료되었습니다",
        ),
        "MS011": message(
            "ORDER_CANCELLED",
            "Hủy đơn hàng thành công",
            "Order cancelled successfully",
            "주문이 취소되었습니다",
        ),
    },
    fallback_code="MS000",
)

PROFILE = SurfaceProfile(
    surface=ClientSurface.MOBILE,
    prefix="M",
    codes=CODES,
    role_table=RolePermissionTable(ROLE_PERMISSIONS),
    permission_registry=PermissionRegistry(),
    error_catalog=ERROR_MESSAGES,
    success_catalog=SUCCESS_MESSAGES,
)
