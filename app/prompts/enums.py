"""Closed value sets for prompt classification and listing."""

import enum


class Category(str, enum.Enum):
    CREATIVE = "クリエイティブ"
    BUSINESS = "ビジネス"
    EDUCATION = "教育"
    TECHNICAL = "テクニカル"
    DATA_ANALYSIS = "データ分析"
    OTHER = "その他"


class Purpose(str, enum.Enum):
    TEXT_GENERATION = "文章生成"
    CODE_GENERATION = "コード作成"
    DATA_ANALYSIS = "データ分析"
    IMAGE_GENERATION = "画像生成"
    SUMMARIZATION = "要約"
    IDEATION = "アイデア出し"
    LEARNING = "学習支援"
    OTHER = "その他"


class SortMode(str, enum.Enum):
    LATEST = "latest"
    POPULAR = "popular"
    TRENDING = "trending"
    FEATURED = "featured"


DEFAULT_SERVICE = "その他"

# Query-string value meaning "no filter" for category/purpose
ALL_FILTER = "all"
