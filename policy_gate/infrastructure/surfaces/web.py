"""Store web console: S-prefixed codes, store staff roles."""

from policy_gate.application.services.permission_service import PermissionRegistry
from policy_gate.application.services.role_service import RolePermissionTable
from policy_gate.domain.enums import ClientSurface, ErrorKind, Role
from policy_gate.infrastructure.messages.catalog import MessageCatalog
from policy_gate.infrastructure.surfaces.base import SurfaceProfile, message

CODES = {
    ErrorKind.SYSTEM_ERROR: "S1001",
    ErrorKind.VALIDATION_FAILED: "S1002",
    ErrorKind.MISSING_REQUIRED_FIELD: "S1006",
    ErrorKind.UNAUTHENTICATED: "S2001",
    ErrorKind.UNAUTHORIZED: "S2002",
    ErrorKind.TOKEN_EXPIRED: "S2003",
    ErrorKind.INVALID_TOKEN: "S2004",
    ErrorKind.ACCOUNT_SUSPENDED: "S2006",
    ErrorKind.ACCOUNT_TERMINATED: "S2007",
    ErrorKind.INSUFFICIENT_PERMISSIONS: "S2009",
    ErrorKind.PHONE_NOT_VERIFIED: "S2012",
    ErrorKind.TENANT_ACCESS_DENIED: "S3008",
}

DUPLICATE_STORE_NAME = "S3067"
DUPLICATE_CATEGORY_NAME = "S4022"

_STORE_OWNER_PERMISSIONS = (
    "MANAGE_STORE_INFO", "MANAGE_BUSINESS_HOURS", "MANAGE_DELIVERY_SETTINGS",
    "CREATE_MENU_ITEM", "UPDATE_MENU_ITEM", "DELETE_MENU_ITEM", "MANAGE_MENU_CATEGORIES",
    "VIEW_ORDERS", "MANAGE_ORDERS", "PROCESS_REFUNDS",
    "INVITE_STAFF", "MANAGE_STAFF_ROLES",
    "VIEW_REVENUE", "VIEW_REPORTS", "MANAGE_PROMOTIONS",
    "MANAGE_POS_SETTINGS", "MANAGE_BANK_ACCOUNT",
)

ROLE_PERMISSIONS = {
    Role.FRANCHISE_OWNER: _STORE_OWNER_PERMISSIONS + (
        "MANAGE_MULTIPLE_STORES", "VIEW_FRANCHISE_REPORTS", "MANAGE_FRANCHISE_SETTINGS",
    ),
    Role.STORE_OWNER: _STORE_OWNER_PERMISSIONS,
    Role.STORE_MANAGER: (
        "UPDATE_MENU_ITEM", "MANAGE_MENU_AVAILABILITY",
        "VIEW_ORDERS", "MANAGE_ORDERS", "PROCESS_REFUNDS",
        "VIEW_REVENUE", "USE_POS", "MANAGE_STAFF_SCHEDULE",
    ),
    Role.CHEF: ("VIEW_ORDERS", "MANAGE_ORDERS", "USE_POS", "UPDATE_MENU_AVAILABILITY"),
    Role.CASHIER: ("VIEW_ORDERS", "USE_POS", "VIEW_POS_REPORTS", "PROCESS_PAYMENTS"),
    Role.DELIVERY_MANAGER: (
        "VIEW_ORDERS", "MANAGE_DELIVERIES", "ASSIGN_DRIVERS", "VIEW_DELIVERY_REPORTS",
    ),
}

# Action name -> required permissions, for actions that do not declare their own.
ACTION_PERMISSIONS = {
    "update_store_info": ["MANAGE_STORE_INFO"],
    "update_business_hours": ["MANAGE_BUSINESS_HOURS"],
    "update_delivery_settings": ["MANAGE_DELIVERY_SETTINGS"],
    "create_menu_item": ["CREATE_MENU_ITEM"],
    "update_menu_item": ["UPDATE_MENU_ITEM"],
    "delete_menu_item": ["DELETE_MENU_ITEM"],
    "create_menu_category": ["MANAGE_MENU_CATEGORIES"],
    "update_menu_category": ["MANAGE_MENU_CATEGORIES"],
    "list_orders": ["VIEW_ORDERS"],
    "update_order_status": ["VIEW_ORDERS", "MANAGE_ORDERS"],
    "refund_order": ["MANAGE_ORDERS", "PROCESS_REFUNDS"],
    "invite_staff": ["INVITE_STAFF"],
    "update_staff_role": ["MANAGE_STAFF_ROLES"],
    "revenue_summary": ["VIEW_REVENUE"],
    "create_promotion": ["MANAGE_PROMOTIONS"],
    "update_pos_settings": ["MANAGE_POS_SETTINGS"],
    "update_bank_account": ["MANAGE_BANK_ACCOUNT"],
    "list_franchise_stores": ["MANAGE_MULTIPLE_STORES"],
}

ERROR_MESSAGES = MessageCatalog(
    {
        "S1001": message(
            "[S1001]SYSTEM_ERROR",
            "Đã xảy ra lỗi hệ thống. Vui lòng thử lại sau.",
            "A system error occurred. Please try again later.",
            "시스템 오류가 발생했습니다. 잠시 후 다시 시도해주세요.",
        ),
        "S1002": message(
            "[S1002]VALIDATION_FAILED",
            "Dữ liệu không hợp lệ.",
            "The submitted data is invalid.",
            "입력 데이터가 올바르지 않습니다.",
        ),
        "S1006": message(
            "[S1006]MISSING_REQUIRED_FIELD",
            "Thiếu trường bắt buộc.",
            "A required field is missing.",
            "필수 입력 항목이 누락되었습니다.",
        ),
        "S2001": message(
            "[S2001]UNAUTHENTICATED",
            "Vui lòng đăng nhập.",
            "Please log in.",
            "로그인이 필요합니다.",
        ),
        "S2002": message(
            "[S2002]UNAUTHORIZED",
            "Bạn không có quyền thực hiện thao tác này.",
            "You are not authorized to perform this action.",
            "이 작업을 수행할 권한이 없습니다.",
        ),
        "S2003": message(
            "[S2003]TOKEN_EXPIRED",
            "Phiên đăng nhập đã hết hạn. Vui lòng đăng nhập lại.",
            "Your session has expired. Please log in again.",
            "세션이 만료되었습니다. 다시 로그인해주세요.",
        ),
        "S2004": message(
            "[S2004]INVALID_TOKEN",
            "Token không hợp lệ.",
            "The access token is invalid.",
            "유효하지 않은 토큰입니다.",
        ),
        "S2006": message(
            "[S2006]ACCOUNT_SUSPENDED",
            "Tài khoản đã bị tạm ngưng.",
            "This account has been suspended.",
            "정지된 계정입니다.",
        ),
        "S2007": message(
            "[S2007]ACCOUNT_TERMINATED",
            "Tài khoản đã bị chấm dứt.",
            "This account has been terminated.",
            "해지된 계정입니다.",
        ),
        "S2009": message(
            "[S2009]INSUFFICIENT_PERMISSIONS",
            "Bạn không đủ quyền hạn.",
            "You do not have sufficient permissions.",
            "권한이 부족합니다.",
        ),
        "S2012": message(
            "[S2012]PHONE_NOT_VERIFIED",
            "Số điện thoại chưa được xác thực.",
            "Your phone number has not been verified.",
            "전화번호 인증이 필요합니다.",
        ),
        "S3008": message(
            "[S3008]TENANT_ACCESS_DENIED",
            "Bạn không có quyền truy cập cửa hàng này.",
            "You do not have access to this store.",
            "이 매장에 접근할 권한이 없습니다.",
        ),
        DUPLICATE_STORE_NAME: message(
            "[S3067]DUPLICATE_STORE_NAME",
            "Tên cửa hàng đã tồn tại.",
            "A store with this name already exists.",
            "이미 존재하는 매장 이름입니다.",
        ),
        DUPLICATE_CATEGORY_NAME: message(
            "[S4022]DUPLICATE_CATEGORY_NAME",
            "Tên danh mục đã tồn tại.",
            "Category name already exists.",
            "이미 존재하는 카테고리 이름입니다.",
            templates={
                "vi": 'Tên danh mục ({language_name}) đã tồn tại: "{duplicate_name}"',
                "en": 'Category name ({language_name}) already exists: "{duplicate_name}"',
                "ko": '카테고리 이름 ({language_name})이 이미 존재합니다: "{duplicate_name}"',
            },
        ),
    },
    fallback_code="S1001",
)

SUCCESS_MESSAGES = MessageCatalog(
    {
        "SS000": message(
            "OPERATION_SUCCESSFUL",
            "Thao tác thành công",
            "Operation completed successfully",
            "작업이 완료되었습니다",
        ),
        "SS001": message(
            "STORE_REGISTRATION_SUCCESSFUL",
            "Đăng ký cửa hàng thành công",
            "Store registration successful",
            "매장 등록이 완료되었습니다",
        ),
        "SS002": message(
            "STORE_LOGIN_SUCCESSFUL",
            "Đăng nhập cửa hàng thành công",
            "Store login successful",
            "매장 로그인 성공",
        ),
        "SS011": message(
            "PROFILE_UPDATED",
            "Cập nhật hồ sơ thành công",
            "Profile updated successfully",
            "프로필이 업데이트되었습니다",
        ),
        "SS015": message(
            "PERMISSIONS_UPDATED",
            "Cập nhật quyền hạn thành công",
            "Permissions updated successfully",
            "권한이 업데이트되었습니다",
        ),
        "SS041": message(
            "STAFF_CREATED",
            "Tạo tài khoản nhân viên thành công",
            "Staff account created successfully",
            "직원 계정이 생성되었습니다",
        ),
        "SS042": message(
            "STAFF_UPDATED",
            "Cập nhật thông tin nhân viên thành công",
            "Staff account updated successfully",
            "직원 정보가 업데이트되었습니다",
        ),
        "SS100": message(
            "STORE_PROFILE_UPDATED",
            "Cập nhật hồ sơ cửa hàng thành công",
            "Store profile updated successfully",
            "매장 프로필이 업데이트되었습니다",
        ),
        "SS110": message(
            "STORE_HOURS_UPDATED",
            "Cập nhật giờ hoạt động thành công",
            "Store hours updated successfully",
            "영업시간이 업데이트되었습니다",
        ),
    },
    fallback_code="SS000",
)

PROFILE = SurfaceProfile(
    surface=ClientSurface.WEB,
    prefix="S",
    codes=CODES,
    role_table=RolePermissionTable(ROLE_PERMISSIONS),
    permission_registry=PermissionRegistry(ACTION_PERMISSIONS),
    error_catalog=ERROR_MESSAGES,
    success_catalog=SUCCESS_MESSAGES,
    constraints={
        "uk_store_name": DUPLICATE_STORE_NAME,
        "uk_menu_category_name": DUPLICATE_CATEGORY_NAME,
    },
)
