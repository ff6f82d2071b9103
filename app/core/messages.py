"""Japanese error messages and user-facing text for the backend."""

# Authentication messages
AUTH_TOKEN_MISSING = "認証トークンがありません"
AUTH_TOKEN_INVALID = "トークンが無効です"
AUTH_INVALID_CREDENTIALS = "メールアドレスまたはパスワードが正しくありません"

# Registration messages
REG_USERNAME_EXISTS = "このユーザー名は既に使用されています"
REG_EMAIL_EXISTS = "このメールアドレスは既に使用されています"
REG_USERNAME_TOO_SHORT = "ユーザー名は{min_length}文字以上必要です"
REG_PASSWORD_TOO_SHORT = "パスワードは{min_length}文字以上必要です"
REG_PASSWORD_TOO_LONG = "パスワードは{max_bytes}バイト以内で入力してください"

# User messages
USER_NOT_FOUND = "ユーザーが見つかりません"
USER_CANNOT_FOLLOW_SELF = "自分自身をフォローすることはできません"

# Prompt messages
PROMPT_NOT_FOUND = "プロンプトが見つかりません"
PROMPT_NOT_DELETED = "このプロンプトは削除されていません"
PROMPT_DELETED = "プロンプトを削除しました"
PROMPT_RESTORED = "プロンプトを復元しました"
PROMPT_FIELD_REQUIRED = "{field}は必須です"
PROMPT_INVALID_CATEGORY = "カテゴリが不正です"
PROMPT_INVALID_PURPOSE = "用途が不正です"

# Comment messages
COMMENT_NOT_FOUND = "コメントが見つかりません"
COMMENT_CONTENT_REQUIRED = "コメント内容は必須です"

# Validation messages
VALIDATION_FAILED = "入力内容が正しくありません"
VALIDATION_INVALID_ID = "IDの形式が正しくありません"

# General error messages
ERROR_INTERNAL_SERVER = "サーバーエラーが発生しました"
ERROR_PERMISSION_DENIED = "権限がありません"
