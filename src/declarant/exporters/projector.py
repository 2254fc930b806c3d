"""Project a CustomsRecord into the four sheet layouts."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from ..core.models import CustomsRecord, GoodsItem

Cell = str | int | Decimal
Row = tuple[Cell, ...]

PAYMENT_TERMS_PLACEHOLDER = "T/T or L/C"
MARKS_PLACEHOLDER = "N/M"


@dataclass(frozen=True)
class ProjectedSheet:
    """One sheet as a cell matrix plus column width hints.

    `has_total_row` marks the last row as the totals row.
    """

    name: str
    rows: tuple[Row, ...]
    column_widths: tuple[int, ...] = ()
    has_total_row: bool = False


@dataclass(frozen=True)
class ProjectedLayouts:
    """The four sheets generated for one record."""

    declaration: ProjectedSheet
    packing: ProjectedSheet
    invoice: ProjectedSheet
    contract: ProjectedSheet

    def sheets(self) -> list[ProjectedSheet]:
        """Sheets in workbook order."""
        return [self.declaration, self.packing, self.invoice, self.contract]


def format_number(value: Decimal | None) -> str:
    """Render a number for a text cell: 1250 stays "1250", 2.50 becomes "2.5"."""
    if value is None:
        return ""
    if value == value.to_integral_value():
        return str(int(value))
    return format(value.normalize(), "f")


def _number_cell(value: Decimal | None) -> Cell:
    return "" if value is None else value


def _sum(values) -> Decimal:
    return sum(values, Decimal("0"))


class RecordProjector:
    """
    Build the declaration, packing list, invoice and contract sheets.

    Projection is pure: the same record and declaration date always give the
    same cell matrices.
    """

    DECLARATION_SHEET = "报关单草单 (Declaration)"
    PACKING_SHEET = "装箱单 (Packing List)"
    INVOICE_SHEET = "发票 (Invoice)"
    CONTRACT_SHEET = "合同要素 (Contract)"

    def project(self, record: CustomsRecord, declaration_date: date) -> ProjectedLayouts:
        return ProjectedLayouts(
            declaration=self.declaration_sheet(record, declaration_date),
            packing=self.packing_sheet(record),
            invoice=self.invoice_sheet(record),
            contract=self.contract_sheet(record),
        )

    def declaration_sheet(self, record: CustomsRecord, declaration_date: date) -> ProjectedSheet:
        """Import declaration draft: header block then one row per goods item."""
        contract = record.contract_info
        invoice = record.invoice_info
        packing = record.packing_info
        goods = record.goods_list

        trade_country = goods[0].origin_country if goods else ""

        rows: list[Row] = [
            ("进口货物报关单草单 (Import Declaration Draft)",),
            (),
            ("预录入编号", "", "海关编号", ""),
            ("境内收货人", contract.buyer, "境外发货人", contract.seller),
            ("进口口岸", "", "进口日期", ""),
            ("申报日期", declaration_date.isoformat(), "运输方式", "水路/航空"),
            ("提运单号", "", "监管方式", "一般贸易"),
            ("合同协议号", contract.contract_number, "贸易国(地区)", trade_country),
            ("包装种类", packing.package_type, "件数", _number_cell(packing.total_packages)),
            (
                "毛重(KG)",
                _number_cell(packing.total_gross_weight),
                "净重(KG)",
                _number_cell(packing.total_net_weight),
            ),
            ("成交方式", invoice.incoterms, "运费", "", "保费", ""),
            (),
            ("项号", "商品编号", "商品名称及规格型号", "数量及单位", "单价/总价/币制", "原产国"),
        ]

        for index, item in enumerate(goods, start=1):
            rows.append(
                (
                    index,
                    item.hs_code,
                    f"{item.name_chinese}\n{item.element_string}",
                    f"{format_number(item.quantity)} {item.unit}",
                    f"{format_number(item.unit_price)} / {format_number(item.total_price)} / {invoice.currency}",
                    item.origin_country,
                )
            )

        return ProjectedSheet(
            name=self.DECLARATION_SHEET,
            rows=tuple(rows),
            column_widths=(10, 15, 50, 20, 25, 15),
        )

    def packing_sheet(self, record: CustomsRecord) -> ProjectedSheet:
        """Packing list with a TOTAL row of net/gross weights."""
        invoice = record.invoice_info
        goods = record.goods_list

        rows: list[Row] = [
            ("装箱单 (PACKING LIST)",),
            ("Invoice No:", invoice.invoice_number, "Date:", invoice.date),
            (),
            ("No.", "Description", "Quantity", "Unit", "N.W.(KG)", "G.W.(KG)"),
        ]

        for index, item in enumerate(goods, start=1):
            rows.append((index, item.name_chinese, item.quantity, item.unit, item.net_weight, item.gross_weight))

        net, gross = self.total_weights(record)
        rows.append(("TOTAL", "", "", "", net, gross))

        return ProjectedSheet(
            name=self.PACKING_SHEET,
            rows=tuple(rows),
            column_widths=(5, 30, 10, 10, 15, 15),
            has_total_row=True,
        )

    def invoice_sheet(self, record: CustomsRecord) -> ProjectedSheet:
        """Commercial invoice with a TOTAL amount row."""
        contract = record.contract_info
        invoice = record.invoice_info
        currency = invoice.currency

        rows: list[Row] = [
            ("商业发票 (COMMERCIAL INVOICE)",),
            ("Seller:", contract.seller),
            ("Buyer:", contract.buyer),
            ("Invoice No:", invoice.invoice_number),
            ("Date:", invoice.date),
            (),
            ("Marks & Nos", "Description of Goods", "Quantity", "Unit Price", "Amount"),
        ]

        for item in record.goods_list:
            rows.append(
                (
                    MARKS_PLACEHOLDER,
                    item.name_english or item.name_chinese,
                    item.quantity,
                    f"{currency} {format_number(item.unit_price)}",
                    f"{currency} {format_number(item.total_price)}",
                )
            )

        rows.append(("", "TOTAL", "", "", f"{currency} {format_number(self.total_amount(record))}"))

        return ProjectedSheet(
            name=self.INVOICE_SHEET,
            rows=tuple(rows),
            column_widths=(15, 40, 10, 15, 15),
            has_total_row=True,
        )

    def contract_sheet(self, record: CustomsRecord) -> ProjectedSheet:
        """Key/value summary of the sales contract."""
        contract = record.contract_info

        rows: tuple[Row, ...] = (
            ("售货合同 (SALES CONTRACT)",),
            ("合同号 (Contract No):", contract.contract_number),
            ("签约日期 (Date):", contract.date),
            ("签约地点 (Place):", contract.signing_place),
            ("买方 (Buyer):", contract.buyer),
            ("卖方 (Seller):", contract.seller),
            ("付款方式:", PAYMENT_TERMS_PLACEHOLDER),
        )

        return ProjectedSheet(name=self.CONTRACT_SHEET, rows=rows, column_widths=(20, 50))

    def total_weights(self, record: CustomsRecord) -> tuple[Decimal, Decimal]:
        """Packing totals as stated, falling back to the sum of the items."""
        packing = record.packing_info
        goods: tuple[GoodsItem, ...] = record.goods_list

        net = packing.total_net_weight
        if net is None:
            net = _sum(item.net_weight for item in goods)

        gross = packing.total_gross_weight
        if gross is None:
            gross = _sum(item.gross_weight for item in goods)

        return net, gross

    def total_amount(self, record: CustomsRecord) -> Decimal:
        """Invoice total as stated, falling back to the sum of item totals."""
        if record.invoice_info.total_amount is not None:
            return record.invoice_info.total_amount
        return _sum(item.total_price for item in record.goods_list)
