"""
Translated UI strings.
"""

from . import config

TRANSLATIONS = {
    'en': {
        'name_required': "Please enter a name",
        'unknown_type': "Unknown item type",
        'unknown_field': "Unknown item field",
        'unknown_locale': "Unsupported language",
        'saved': "Success!",
        'deleted': "Deleted",
        'favorite_updated': "Updated favorites",
        'copied': "Copied to clipboard",
        'search': "Search vault...",
        'all_types': "All items",
        'login': "Login",
        'card': "Card",
        'note': "Secure note",
        'favorites_only': "Favorites",
        'add_item': "New Item",
        'edit_item': "Edit Item",
        'generator': "Generator",
        'audit': "Security Audit",
        'name': "Name",
        'type': "Type",
        'username': "Username",
        'password': "Password",
        'url': "Website",
        'card_number': "Card number",
        'expiry': "Expiry",
        'cvv': "CVV",
        'last_used': "Last used",
        'actions': "Actions",
        'generate': "Generate",
        'ai_check': "AI check",
        'checking': "Checking...",
        'length': "Length",
        'include_numbers': "Numbers (0-9)",
        'include_symbols': "Symbols (!@#$...)",
        'regenerate': "Regenerate",
        'copy': "Copy",
        'score': "Security score",
        'reused': "Reused",
        'weak': "Weak",
        'no_reused': "Great! No reused passwords.",
        'no_weak': "Awesome! All passwords are strong.",
        'excellent': "Excellent",
        'good': "Good",
        'needs_work': "Needs Work",
        'tip': "Tip",
        'items_count': "Items: {count}",
        'confirm_delete': "Delete \"{name}\"?",
    },
    'vi': {
        'name_required': "Vui lòng nhập tên",
        'unknown_type': "Loại mục không hợp lệ",
        'unknown_field': "Trường không hợp lệ",
        'unknown_locale': "Ngôn ngữ không được hỗ trợ",
        'saved': "Thành công!",
        'deleted': "Đã xóa",
        'favorite_updated': "Đã cập nhật yêu thích",
        'copied': "Đã sao chép",
        'search': "Tìm trong kho...",
        'all_types': "Tất cả",
        'login': "Đăng nhập",
        'card': "Thẻ",
        'note': "Ghi chú bảo mật",
        'favorites_only': "Yêu thích",
        'add_item': "Thêm mới",
        'edit_item': "Sửa mục",
        'generator': "Tạo mật khẩu",
        'audit': "Kiểm tra bảo mật",
        'name': "Tên",
        'type': "Loại",
        'username': "Tên đăng nhập",
        'password': "Mật khẩu",
        'url': "Trang web",
        'card_number': "Số thẻ",
        'expiry': "Hết hạn",
        'cvv': "CVV",
        'last_used': "Dùng lần cuối",
        'actions': "Thao tác",
        'generate': "Tạo",
        'ai_check': "Dùng AI",
        'checking': "Đang kiểm tra...",
        'length': "Độ dài",
        'include_numbers': "Số (0-9)",
        'include_symbols': "Ký hiệu (!@#$...)",
        'regenerate': "Tạo lại",
        'copy': "Sao chép",
        'score': "Điểm bảo mật",
        'reused': "Trùng lặp",
        'weak': "Mật khẩu yếu",
        'no_reused': "Tuyệt vời! Không có mật khẩu trùng lặp.",
        'no_weak': "Tuyệt vời! Mọi mật khẩu đều mạnh.",
        'excellent': "Xuất sắc",
        'good': "Tốt",
        'needs_work': "Cần cải thiện",
        'tip': "Mẹo",
        'items_count': "Số mục: {count}",
        'confirm_delete': "Xóa \"{name}\"?",
    },
    'zh': {
        'name_required': "请输入名称",
        'unknown_type': "未知的项目类型",
        'unknown_field': "未知的字段",
        'unknown_locale': "不支持的语言",
        'saved': "成功！",
        'deleted': "已删除",
        'favorite_updated': "已更新收藏",
        'copied': "已复制",
        'search': "搜索保险库...",
        'all_types': "全部",
        'login': "登录",
        'card': "银行卡",
        'note': "安全笔记",
        'favorites_only': "收藏",
        'add_item': "新建项目",
        'edit_item': "编辑项目",
        'generator': "密码生成器",
        'audit': "安全审计",
        'name': "名称",
        'type': "类型",
        'username': "用户名",
        'password': "密码",
        'url': "网站",
        'card_number': "卡号",
        'expiry': "有效期",
        'cvv': "CVV",
        'last_used': "最近使用",
        'actions': "操作",
        'generate': "生成",
        'ai_check': "AI 检查",
        'checking': "检查中...",
        'length': "长度",
        'include_numbers': "数字 (0-9)",
        'include_symbols': "符号 (!@#$...)",
        'regenerate': "重新生成",
        'copy': "复制",
        'score': "安全评分",
        'reused': "重复使用",
        'weak': "弱密码",
        'no_reused': "很好！没有重复使用的密码。",
        'no_weak': "太棒了！所有密码都很强。",
        'excellent': "优秀",
        'good': "良好",
        'needs_work': "需要改进",
        'tip': "提示",
        'items_count': "项目数: {count}",
        'confirm_delete': "删除 \"{name}\"？",
    },
}


def translate(key: str, locale: str = config.DEFAULT_LOCALE, **kwargs) -> str:
    """Look up ``key`` for ``locale``, falling back to English, then the key."""
    text = TRANSLATIONS.get(locale, {}).get(key)
    if text is None:
        text = TRANSLATIONS['en'].get(key, key)
    return text.format(**kwargs) if kwargs else text
