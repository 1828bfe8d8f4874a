"""
Feieyun Wire Constants
======================

Operation names (``apiname``) and form field names used by the Feieyun
open API. See: http://www.feieyun.com/open/index.html
"""

# =============================================================================
# Operations
# =============================================================================

PRINTER_ADD_LIST = 'Open_printerAddlist'
PRINTER_DEL_LIST = 'Open_printerDelList'
PRINT_MSG = 'Open_printMsg'
PRINT_LABEL_MSG = 'Open_printLabelMsg'
PRINTER_EDIT = 'Open_printerEdit'
DEL_PRINTER_SQS = 'Open_delPrinterSqs'
QUERY_ORDER_STATE = 'Open_queryOrderState'
QUERY_ORDER_INFO_BY_DATE = 'Open_queryOrderInfoByDate'
QUERY_PRINTER_STATUS = 'Open_queryPrinterStatus'

# =============================================================================
# Universal request fields
# =============================================================================

USER_FIELD = 'user'
STIME_FIELD = 'stime'
SIG_FIELD = 'sig'
APINAME_FIELD = 'apiname'
DEBUG_FIELD = 'debug'

# =============================================================================
# Operation request fields
# =============================================================================

PRINTER_CONTENT_FIELD = 'printerContent'
SNLIST_FIELD = 'snlist'
SN_FIELD = 'sn'
CONTENT_FIELD = 'content'
EXPIRED_FIELD = 'expired'
TIMES_FIELD = 'times'
BACKURL_FIELD = 'backurl'
IMG_FIELD = 'img'
NAME_FIELD = 'name'
PHONENUM_FIELD = 'phonenum'
ORDERID_FIELD = 'orderid'
DATE_FIELD = 'date'

# =============================================================================
# Callback fields (vendor -> integrator)
# =============================================================================

CALLBACK_ORDER_ID = 'orderId'
CALLBACK_STATUS = 'status'
CALLBACK_STIME = 'stime'
CALLBACK_SIGN = 'sign'

# Body the vendor expects back within 5 seconds, otherwise it redelivers
CALLBACK_ACK = 'SUCCESS'

# =============================================================================
# Printer status strings returned by Open_queryPrinterStatus
# =============================================================================

PRINTER_STATUS_OFFLINE = '离线。'
PRINTER_STATUS_ONLINE_OK = '在线，工作状态正常。'
PRINTER_STATUS_ONLINE_FAULT = '在线，工作状态不正常。'

PRINTER_STATUSES = (
    PRINTER_STATUS_OFFLINE,
    PRINTER_STATUS_ONLINE_OK,
    PRINTER_STATUS_ONLINE_FAULT,
)
