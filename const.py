# Pagination Defaults
DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 20
MAX_PER_PAGE = 100

# Checkout form rules
MIN_CUSTOMER_NAME_LENGTH = 2
MIN_CUSTOMER_ADDRESS_LENGTH = 10
# Bangladeshi mobile numbers: 01 + operator digit 3-9 + 8 digits
PHONE_PATTERN = r"^01[3-9]\d{8}$"

ORDER_NUMBER_PREFIX = "EID"
ORDER_NUMBER_SUFFIX_LENGTH = 4

CURRENCY_SYMBOL = "৳"

ROLE_ADMIN = "ADMIN"
ROLE_CUSTOMER = "CUSTOMER"

SMS_TIMEOUT = 10

# Upper bounds matching the order columns
MAX_CUSTOMER_NAME_LENGTH = 255
MAX_CUSTOMER_ADDRESS_LENGTH = 1000
MAX_TRANSACTION_ID_LENGTH = 100
MAX_PROMO_CODE_LENGTH = 50
MAX_VARIANT_INFO_LENGTH = 500
