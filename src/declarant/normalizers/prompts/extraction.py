"""Extraction prompt for the customs declaration analysis."""

SYSTEM_INSTRUCTION = """You are an expert China Customs Broker and International Trade Specialist.
Your task is to analyze four input documents (Contract, Invoice, Product Description, Packing List) and extract the data needed to prepare a Chinese Customs Declaration Excel file.

CRITICAL RULES:
1. Output MUST be a single valid JSON object, with no text before or after it.
2. Translate all descriptions and names into Simplified CHINESE suitable for customs declaration.
3. Determine the HS Code from the product description. If the provided HS Code is rough, refine it to the China Customs 10-digit format when you are confident; otherwise keep the provided 6-8 digit code.
4. For "elementString" (申报要素), construct the string Chinese customs requires for the HS code category (e.g. "品牌|型号|成分|用途"). Use the Description document to fill it.
5. Keep the 4 documents consistent. If they conflict, prefer the Invoice for numbers and the Description for product details.
"""

OUTPUT_CONTRACT_VERSION = "1.0"

# Shape of the JSON object the model must return. Mirrors CustomsRecord.
OUTPUT_CONTRACT = """{
  "contractInfo": {
    "contractNumber": "string",
    "date": "string",
    "buyer": "string (domestic consignee in China)",
    "seller": "string (foreign shipper)",
    "signingPlace": "string"
  },
  "invoiceInfo": {
    "invoiceNumber": "string",
    "date": "string",
    "currency": "string (ISO code, e.g. USD)",
    "totalAmount": 0,
    "incoterms": "string (e.g. CIF Shanghai)"
  },
  "packingInfo": {
    "totalPackages": 0,
    "totalNetWeight": 0,
    "totalGrossWeight": 0,
    "packageType": "string (e.g. 托盘, 纸箱)"
  },
  "goodsList": [
    {
      "hsCode": "string (digits only, 6-10 digits)",
      "nameChinese": "string",
      "nameEnglish": "string",
      "elementString": "string (申报要素 in Chinese, e.g. 1:品名;2:成分...)",
      "quantity": 0,
      "unit": "string (unit in Chinese, e.g. 千克, 个)",
      "unitPrice": 0,
      "totalPrice": 0,
      "netWeight": 0,
      "grossWeight": 0,
      "originCountry": "string (country of origin in Chinese, e.g. 韩国)"
    }
  ],
  "summary": "string (brief summary of what was analyzed and any potential issues found)"
}"""

USER_PROMPT = """Please analyze the following 4 documents:

--- DOCUMENT 1: CONTRACT ---
{contract_text}

--- DOCUMENT 2: INVOICE ---
{invoice_text}

--- DOCUMENT 3: PRODUCT DESCRIPTION & HS CODE ---
{description_text}

--- DOCUMENT 4: PACKING LIST ---
{packing_text}

---

Return a JSON object with exactly this structure (output contract v{version}).
Numbers must be plain JSON numbers (no currency symbols or units) and never negative.

{output_contract}

Rules:
- All string values in "goodsList" must be in Chinese, except model numbers or brands that are naturally English.
- If the documents conflict, use the Invoice for quantities, prices and amounts, and the Description for product details.
- Calculate total weights by summing the items if they are not explicitly stated.
"""


def get_extraction_prompt(
    contract_text: str,
    invoice_text: str,
    description_text: str,
    packing_text: str,
) -> str:
    """
    Generate the user prompt with the four (already truncated) documents.

    Returns:
        Complete user prompt for the LLM
    """
    return USER_PROMPT.format(
        contract_text=contract_text,
        invoice_text=invoice_text,
        description_text=description_text,
        packing_text=packing_text,
        version=OUTPUT_CONTRACT_VERSION,
        output_contract=OUTPUT_CONTRACT,
    )
