"""
Candidate field names per concept, tried in priority order.

The upstream menu API has no fixed schema: the same concept shows up under
different keys for single products, combo bundles and legacy payloads.
"""

# Envelope wrappers around an item detail record.
DETAIL_WRAPPER_KEYS = ("goodsDetail", "spuDetail", "data")

SPU_TYPE_KEYS = ("spuType",)
COMBO_SPU_TYPE = "combo"

ROOT_NAME_KEYS = ("name", "spuName")
SKU_LIST_KEYS = ("skuList", "goodsSkuList", "saleSkuList")
SKU_ID_KEYS = ("skuId",)
SKU_NAME_KEYS = ("name", "skuName")
SKU_PRICE_KEYS = ("salePrice", "unitTradePrice", "price")
# Combo base price falls back to these root fields after the primary SKU's.
ROOT_PRICE_KEYS = ("defaultSalePrice", "salePrice", "unitTradePrice", "price")
FALLBACK_PRICE_KEYS = ("salePrice", "unitTradePrice", "price")

# Sellability signals
SALE_OUT_KEYS = ("saleOut",)
SOLD_OUT_KEYS = ("soldOut", "isSoldOut", "outOfStock")
CAN_SELL_KEYS = ("canSale", "available", "isAvailable")
STATUS_KEYS = ("status", "goodsStatus", "saleStatus")
STOCK_LIMIT_KEYS = ("stockLimit",)
STOCK_KEYS = ("stock", "stockNum", "availableNum", "remainNum", "inventory")

# SKU-level spec / attribute pairs
SPEC_LIST_KEYS = ("specList",)
ATTRIBUTE_LIST_KEYS = ("attributeList",)
SPEC_ID_KEYS = ("specId",)
SPEC_OPTION_ID_KEYS = ("specOptionId", "optionId", "attributeOptionId")
ATTRIBUTE_OPTION_ID_KEYS = ("attributeOptionId", "specOptionId", "optionId")
OPTION_DISPLAY_NAME_KEYS = ("specOptionName", "attributeOptionName", "optionName", "name")

# Item-level attribute groups (ice, sweetness, ...)
ATTRIBUTE_GROUP_LIST_KEYS = ("spuAttributeList", "attributeList", "spuAttributeGroups")
ATTRIBUTE_GROUP_NAME_KEYS = ("name", "attributeName", "attrName")
ATTRIBUTE_CHOICE_LIST_KEYS = ("items", "optionList", "attributeOptions")
ATTRIBUTE_CHOICE_ID_KEYS = ("attributeOptionId", "optionId", "id")
ATTRIBUTE_CHOICE_NAME_KEYS = ("name", "attributeOptionName", "optionName")
ATTRIBUTE_DEFAULT_KEYS = ("defaulted", "isDefault")

# Combo structures
COMBO_GROUP_LIST_KEYS = ("comboGroupList",)
COMBO_FIXED_LIST_KEYS = ("comboSkuList",)
COMBO_GROUP_NAME_KEYS = ("comboGroupName", "groupName", "name")
COMBO_GROUP_TYPE_KEYS = ("groupType",)
COMBO_GROUP_REQUIRED_KEYS = ("required",)
COMBO_GROUP_CARDINALITY_KEYS = ("quantity",)
COMBO_CHOICE_LIST_KEYS = ("comboSkuList", "comboGroupSkuList", "skuList")
COMBO_COMPONENT_NAME_KEYS = ("name", "spuName", "skuName", "skuId")
COMBO_COMPONENT_QTY_KEYS = ("num",)
COMBO_PRICE_KEYS = ("comboPrice",)

# Menu listing
MENU_CATEGORY_ARRAY_KEYS = (
    "menuList",
    "classifyList",
    "categoryList",
    "goodsClassifyList",
    "goodsCategoryList",
    "menuCategoryList",
    "classificationList",
    "classList",
    "leftClassifyList",
    "list",
)
MENU_CATEGORY_ID_KEYS = (
    "categoryId",
    "menuCategoryId",
    "classifyId",
    "classificationId",
    "goodsClassifyId",
    "goodsCategoryId",
    "id",
)
MENU_CATEGORY_NAME_KEYS = (
    "categoryName",
    "menuCategoryName",
    "classifyName",
    "classificationName",
    "goodsClassifyName",
    "goodsCategoryName",
    "title",
    "name",
)
MENU_ITEM_ARRAY_KEYS = (
    "goodsList",
    "spuList",
    "goodsSpuList",
    "productList",
    "itemList",
    "items",
    "menuGoodsList",
    "list",
)
MENU_GROUP_ARRAY_KEYS = ("goodsGroupList", "groupList", "subClassifyList", "children", "tabs")
MENU_ITEM_SPU_ID_KEYS = ("spuId", "goodsId", "id")
MENU_ITEM_SKU_ID_KEYS = ("skuId", "defaultSkuId")
MENU_ITEM_NAME_KEYS = ("spuName", "goodsName", "name", "title")
MENU_ITEM_PRICE_KEYS = ("salePrice", "unitTradePrice", "price", "minPrice")
