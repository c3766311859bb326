# -*- coding: utf-8 -*-
"""
LangKeeper Report Messages
Human-readable reports for the controller and the command line, in English and Chinese.
"""

from langkeeper_logger import get_logger

logger = get_logger("locales")

SUPPORTED_UI_LANGUAGES = {
    "en": "English",
    "zh": "中文",
}

DEFAULT_UI_LANGUAGE = "en"
_current_language = DEFAULT_UI_LANGUAGE


def set_language(lang_code: str):
    """Set the current report language."""
    global _current_language
    if lang_code in SUPPORTED_UI_LANGUAGES:
        _current_language = lang_code
        logger.debug(f"UI language set to: {lang_code}")
    else:
        logger.warning(f"Unsupported language code '{lang_code}'. Using '{_current_language}'.")


def get_language() -> str:
    """Get the current report language code."""
    return _current_language


def tr(message_key: str, **kwargs) -> str:
    """
    Translate a message key to the current language.

    Args:
        message_key: Message key
        **kwargs: Format parameters for the message

    Returns:
        Translated message, or the key itself if not found
    """
    messages = TRANSLATIONS.get(_current_language, TRANSLATIONS[DEFAULT_UI_LANGUAGE])
    text = messages.get(message_key) or TRANSLATIONS[DEFAULT_UI_LANGUAGE].get(message_key)
    if text is None:
        return message_key
    if kwargs:
        try:
            return text.format(**kwargs)
        except (KeyError, IndexError):
            logger.warning(f"Bad format parameters for message '{message_key}': {kwargs}")
    return text


TRANSLATIONS = {
    "en": {
        # ERRORS
        "error_no_session": "No extraction session is active. Open a source file first.",
        "error_file_not_found": "File not found: {path}",
        "error_parse_failed": "Failed to parse file: {error}",
        "error_not_found": "No entry with key \"{key}\" in the locale table.",
        "error_key_exists": "An entry with key \"{key}\" already exists.",
        "error_missing_path": "No locale table path is set.",
        "error_save_failed": "Failed to save the locale table: {error}",
        "error_unknown_mode": "Unknown mode \"{mode}\". Available: {modes}",
        "error_unknown_locale": "Unknown locale \"{locale}\". Available: {locales}",

        # STATUS
        "status_session_started": "Extracted {usages} usage(s) from {path}; {entries} table entries loaded.",
        "status_entry_updated": "Updated \"{key}\" ({locale}).",
        "status_entry_added": "Added \"{key}\".",
        "status_usage_deleted": "Removed usages of \"{key}\".",
        "status_entry_deleted": "Removed \"{key}\" from the locale table.",
        "status_merge_done": "Merge finished: {count} new key(s) added.",
        "status_save_success": "Locale table saved: {paths}",
        "status_nothing_to_save": "No changes to save.",
        "status_refreshed": "Data refreshed.",

        # COMMAND LINE
        "cli_usages_header": "Usages ({count}):",
        "cli_table_header": "Locale table ({count}):",
        "cli_diff_header": "Pending changes:",
        "cli_diff_empty": "  (none)",
        "cli_dry_run": "Dry run: nothing written.",
    },
    "zh": {
        # ERRORS
        "error_no_session": "没有正在进行的提取会话，请先打开一个文件。",
        "error_file_not_found": "文件不存在: {path}",
        "error_parse_failed": "解析文件失败: {error}",
        "error_not_found": "未找到 key 为 \"{key}\" 的条目",
        "error_key_exists": "key 为 \"{key}\" 的条目已存在",
        "error_missing_path": "未指定语言文件路径",
        "error_save_failed": "保存语言文件失败: {error}",
        "error_unknown_mode": "未知模式 \"{mode}\"，可用模式: {modes}",
        "error_unknown_locale": "未知语言 \"{locale}\"，可用语言: {locales}",

        # STATUS
        "status_session_started": "从 {path} 提取到 {usages} 条文案，语言文件共 {entries} 条。",
        "status_entry_updated": "已更新 \"{key}\" 的值 ({locale})",
        "status_entry_added": "已添加 \"{key}\"",
        "status_usage_deleted": "已移除 \"{key}\" 的文案",
        "status_entry_deleted": "已从语言文件中移除 \"{key}\"",
        "status_merge_done": "数据合并完成，新增 {count} 条",
        "status_save_success": "语言文件保存成功: {paths}",
        "status_nothing_to_save": "没有需要保存的修改",
        "status_refreshed": "数据刷新成功",

        # COMMAND LINE
        "cli_usages_header": "i18n 文案 ({count}):",
        "cli_table_header": "语言文件 ({count}):",
        "cli_diff_header": "待保存的修改:",
        "cli_diff_empty": "  (无)",
        "cli_dry_run": "试运行：未写入任何文件。",
    },
}
