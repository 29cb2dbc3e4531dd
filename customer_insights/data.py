import pandas as pd

from .models import CUSTOMER_FIELDS, Customer

DIVISIONS = (
    "Dhaka",
    "Rajshahi",
    "Khulna",
    "Barishal",
    "Mymensingh",
    "Sylhet",
    "Rangpur",
    "Chattogram",
)

REFERENCE_CUSTOMERS = (
    Customer("BU79786", "Andrew", "Dhaka", "F", "Married", 36, 56274),
    Customer("QZ44356", "Anne", "Rajshahi", "F", "Single", 31, 0),
    Customer("AI49188", "Anthony", "Khulna", "F", "Married", 50, 48767),
    Customer("WW63253", "Barbara", "Barishal", "M", "Married", 43, 0),
    Customer("HB64268", "Brian", "Mymensingh", "M", "Single", 37, 43836),
    Customer("OC83172", "Bruce", "Sylhet", "F", "Married", 38, 62902),
    Customer("XZ87318", "Carol", "Khulna", "F", "Married", 36, 55350),
    Customer("CF85061", "Christine", "Barishal", "M", "Single", 38, 0),
    Customer("DY87989", "Christopher", "Mymensingh", "M", "Divorced", 30, 14072),
    Customer("BQ94931", "Craig", "Sylhet", "F", "Married", 42, 28812),
    Customer("SX51350", "David", "Rangpur", "M", "Single", 31, 0),
    Customer("VQ65197", "Diane", "Chattogram", "F", "Married", 28, 0),
    Customer("DP39365", "Elizabeth", "Dhaka", "M", "Married", 50, 77026),
    Customer("SJ95423", "Grant", "Rajshahi", "M", "Married", 39, 99845),
    Customer("IL66569", "Gregory", "Khulna", "M", "Single", 25, 83689),
    Customer("BW63560", "Heather", "Barishal", "F", "Married", 35, 24599),
    Customer("FV94802", "Helen", "Mymensingh", "M", "Married", 28, 25049),
    Customer("OE15005", "Ian", "Sylhet", "M", "Married", 28, 28855),
    Customer("WC83389", "James", "Rangpur", "M", "Married", 31, 51148),
    Customer("FL50705", "Janet", "Chattogram", "F", "Married", 45, 66140),
    Customer("ZK25313", "Janice", "Dhaka", "M", "Single", 39, 57749),
    Customer("SV62436", "Jennifer", "Rajshahi", "F", "Divorced", 45, 13789),
    Customer("YH23384", "John", "Mymensingh", "M", "Divorced", 35, 14072),
    Customer("TZ98966", "Judith", "Sylhet", "F", "Single", 36, 0),
    Customer("HM55802", "Julie", "Rangpur", "F", "Married", 46, 17870),
    Customer("FS42516", "Karen", "Chattogram", "M", "Married", 40, 97541),
    Customer("US89481", "Kevin", "Dhaka", "F", "Single", 33, 0),
    Customer("HO30839", "Linda", "Rajshahi", "F", "Married", 47, 10511),
    Customer("GE62437", "Lorraine", "Khulna", "F", "Single", 40, 86584),
    Customer("EJ77678", "Lynette", "Rangpur", "F", "Married", 24, 75690),
    Customer("SV85652", "Margaret", "Chattogram", "M", "Married", 36, 23158),
    Customer("UL64533", "Mark", "Dhaka", "M", "Married", 35, 65999),
    Customer("PF41800", "Mary", "Rajshahi", "M", "Married", 30, 0),
    Customer("AO98601", "Michael", "Khulna", "M", "Married", 28, 54500),
    Customer("SK67821", "Pamela", "Barishal", "F", "Married", 47, 37260),
    Customer("YV55495", "Patricia", "Mymensingh", "F", "Married", 36, 68987),
    Customer("KY38074", "Paul", "Sylhet", "M", "Married", 43, 42305),
    Customer("DM79012", "Peter", "Rangpur", "F", "Married", 39, 65706),
    Customer("CM61827", "Philip", "Chattogram", "M", "Single", 24, 0),
    Customer("WC35801", "Richard", "Khulna", "M", "Divorced", 49, 53243),
    Customer("QG25316", "Robert", "Rangpur", "F", "Married", 45, 0),
    Customer("MB98372", "Robyn", "Chattogram", "F", "Single", 27, 50071),
    Customer("IL19217", "Sandra", "Dhaka", "F", "Married", 34, 60021),
    Customer("SR38658", "Stephen", "Rajshahi", "M", "Married", 25, 43244),
    Customer("DH41343", "Steven", "Mymensingh", "M", "Married", 43, 92834),
    Customer("HG65722", "Susan", "Sylhet", "F", "Married", 47, 10105),
    Customer("BU27331", "Suzanne", "Rangpur", "M", "Single", 48, 0),
    Customer("XM45289", "Wayne", "Chattogram", "F", "Single", 31, 23218),
    Customer("KP34198", "Wendy", "Khulna", "F", "Married", 49, 0),
    Customer("WE95729", "William", "Sylhet", "F", "Married", 35, 0),
)


def load_customers() -> list:
    return list(REFERENCE_CUSTOMERS)


def customers_frame(customers) -> pd.DataFrame:
    rows = [c.to_dict() if isinstance(c, Customer) else dict(c) for c in customers]
    frame = pd.DataFrame(rows, columns=list(CUSTOMER_FIELDS))
    frame["age"] = pd.to_numeric(frame["age"], errors="coerce").fillna(0).astype(int)
    frame["income"] = pd.to_numeric(frame["income"], errors="coerce").fillna(0).astype(int)
    return frame
