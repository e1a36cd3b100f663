"""Sample provider payloads for tests.

Builders return payloads shaped like the real TWSE/TPEx JSON envelopes
and TAIFEX Big5 CSV downloads, with small round numbers.
"""

from typing import Any

LEGACY_ENCODING = "cp950"


# ============================================================================
# TWSE
# ============================================================================


def twse_market_trades_payload(stat: str = "OK") -> dict[str, Any]:
    """FMTQIK month listing: 2024-01-02 and 2024-01-03."""
    return {
        "stat": stat,
        "date": "20240103",
        "fields": ["日期", "成交股數", "成交金額", "成交筆數", "發行量加權股價指數", "漲跌點數"],
        "data": [
            ["113/01/02", "6,023,104,520", "330,178,522,316", "2,733,457", "17,853.76", "-77.05"],
            ["113/01/03", "7,112,400,006", "364,411,802,185", "3,120,488", "17,584.69", "-269.07"],
        ],
    }


def twse_market_breadth_payload(stat: str = "OK") -> dict[str, Any]:
    """MI_INDEX with the advance/decline table at ``tables[7]``."""
    tables: list[dict[str, Any]] = [{"title": f"table {i}", "data": []} for i in range(7)]
    tables.append(
        {
            "title": "漲跌證券數合計",
            "fields": ["類型", "整體市場", "股票"],
            "data": [
                ["上漲(漲停)", "6,512(112)", "512(20)"],
                ["下跌(跌停)", "4,001(15)", "401(3)"],
                ["持平", "1,020", "58"],
                ["未成交", "8,300", "7"],
                ["無比價", "2,100", "3"],
            ],
        }
    )
    return {"stat": stat, "date": "20240102", "tables": tables}


def twse_inst_investors_payload(stat: str = "OK") -> dict[str, Any]:
    """BFI82U: label, buy, sell, net per institution class."""
    return {
        "stat": stat,
        "fields": ["單位名稱", "買進金額", "賣出金額", "買賣差額"],
        "data": [
            ["自營商(自行買賣)", "1,000", "700", "300"],
            ["自營商(避險)", "2,000", "2,100", "-100"],
            ["投信", "900", "400", "500"],
            ["外資及陸資(不含外資自營商)", "5,000", "5,050", "-50"],
            ["外資自營商", "300", "100", "200"],
            ["合計", "9,200", "8,350", "850"],
        ],
    }


def twse_margin_payload(stat: str = "OK") -> dict[str, Any]:
    """MI_MARGN ``tables[0]``: buy, sell, repay, prior balance, today balance."""
    return {
        "stat": stat,
        "tables": [
            {
                "title": "信用交易統計",
                "fields": ["項目", "買進", "賣出", "現金(券)償還", "前日餘額", "今日餘額"],
                "data": [
                    ["融資(交易單位)", "300,000", "280,000", "5,000", "6,500,000", "6,515,000"],
                    ["融券(交易單位)", "20,000", "25,000", "1,000", "250,000", "254,000"],
                    ["融資金額(仟元)", "9,000,000", "8,000,000", "100,000", "160,000,000", "160,900,000"],
                ],
            },
            {"title": "個股", "data": []},
        ],
    }


def twse_no_data_payload() -> dict[str, Any]:
    return {"stat": "很抱歉，沒有符合條件的資料!"}


def isin_listing_html() -> str:
    """ISIN class page: header row, a category separator row, two instruments."""
    return """
<html><body>
<table class="h4">
<tr><td>頁面編號</td><td>國際證券編碼</td><td>有價證券代號</td><td>有價證券名稱</td>
<td>市場別</td><td>有價證券別</td><td>產業別</td><td>公開發行/上市(櫃)/發行日</td></tr>
<tr><td colspan="8">股票</td></tr>
<tr><td>1</td><td>TW0001101004</td><td>1101</td><td>台泥</td><td>上市</td>
<td>股票</td><td>水泥工業</td><td>1962/02/09</td></tr>
<tr><td>2</td><td>TW0002330008</td><td>2330</td><td>台積電</td><td>上市</td>
<td>股票</td><td>半導體業</td><td>1994/09/05</td></tr>
</table>
</body></html>
"""


# ============================================================================
# TPEx
# ============================================================================


def tpex_market_trades_payload(total: int = 2) -> dict[str, Any]:
    return {
        "iTotalRecords": total,
        "aaData": [
            ["113/01/02", "500,000", "30,000,000", "250,000", "232.41", "-1.23"],
            ["113/01/03", "620,000", "35,500,000", "270,100", "228.09", "-4.32"],
        ],
    }


def tpex_market_breadth_payload(total: int = 1) -> dict[str, Any]:
    return {
        "iTotalRecords": total,
        "upNum": "300",
        "upStopNum": "12",
        "downNum": "450",
        "downStopNum": "4",
        "noChangeNum": "90",
        "matchedNum": "25",
    }


def tpex_inst_investors_payload(total: int = 1) -> dict[str, Any]:
    """3itridsum rows; offsets 2, 11 and 14 of the flattened values are the nets."""
    return {
        "iTotalRecords": total,
        "aaData": [
            ["外資及陸資合計", "4,000", "3,000", "1,000"],
            ["外資及陸資", "3,900", "2,950", "950"],
            ["外資自營商", "100", "50", "50"],
            ["投信", "800", "1,100", "-300"],
            ["自營商合計", "600", "480", "120"],
        ],
    }


def tpex_margin_payload(total: int = 1) -> dict[str, Any]:
    """Footer rows mixing labels and blanks with the numbers."""
    return {
        "iTotalRecords": total,
        "tfootData_one": [
            "合計", "",
            "1,000,000", "10,000", "9,000", "500", "1,000,500",
            "",
            "50,000", "2,000", "2,500", "100", "49,400",
        ],
        "tfootData_two": [
            "融資金額(仟元)", "",
            "40,000,000", "900,000", "800,000", "20,000", "40,080,000",
        ],
    }


# ============================================================================
# TAIFEX
# ============================================================================


def csv_bytes(rows: list[list[Any]], encoding: str = LEGACY_ENCODING) -> bytes:
    """Render rows as a CRLF CSV download in the legacy encoding."""
    text = "\r\n".join(",".join(str(c) for c in row) for row in rows) + "\r\n"
    return text.encode(encoding)


def _padded(prefix: list[Any], width: int, values: dict[int, Any]) -> list[Any]:
    row = prefix + ["0"] * (width - len(prefix))
    for index, value in values.items():
        row[index] = value
    return row


def taifex_txf_rows(marker: str = "日期") -> list[list[Any]]:
    """futContractsDateDown: net OI at column 13."""
    header = [marker] + [f"欄{i}" for i in range(1, 15)]
    return [
        header,
        _padded(["2024/01/02", "臺股期貨", "自營商"], 15, {13: "-1200"}),
        _padded(["2024/01/02", "臺股期貨", "投信"], 15, {13: "8000"}),
        _padded(["2024/01/02", "臺股期貨", "外資"], 15, {13: "-25000"}),
    ]


def taifex_txo_rows() -> list[list[Any]]:
    """callsAndPutsDateDown: net OI at 14, net OI value at 15."""
    header = ["日期"] + [f"欄{i}" for i in range(1, 16)]
    classes = [
        ("買權", "自營商", "100", "5000"),
        ("買權", "投信", "20", "300"),
        ("買權", "外資", "-3000", "-45000"),
        ("賣權", "自營商", "-400", "-7000"),
        ("賣權", "投信", "0", "0"),
        ("賣權", "外資", "6000", "52000"),
    ]
    rows = [header]
    for side, investor, net_oi, net_value in classes:
        rows.append(
            _padded(["2024/01/02", "臺指選擇權", side, investor], 16, {14: net_oi, 15: net_value})
        )
    return rows


def taifex_mtx_rows(marker: str = "交易日期") -> list[list[Any]]:
    """futDataDown: OI at 11, session at 17, spread volume at 18."""
    header = [marker] + [f"欄{i}" for i in range(1, 19)]

    def contract(month: str, oi: str, session: str, spread: str) -> list[Any]:
        return _padded(["2024/01/02", "MTX", month], 19, {11: oi, 17: session, 18: spread})

    return [
        header,
        contract("202401", "30000", "一般", "0"),
        contract("202402", "8000", "一般", "12"),
        contract("202403", "2000", "一般", "3"),
        contract("202401", "30000", "盤後", "0"),
        contract("202401/202402", "-", "一般", ""),
    ]


def taifex_mxf_inst_rows() -> list[list[Any]]:
    """futContractsDateDown for MXF: long OI at 9, short OI at 11."""
    header = ["日期"] + [f"欄{i}" for i in range(1, 15)]
    return [
        header,
        _padded(["2024/01/02", "小型臺指期貨", "自營商"], 15, {9: "1000", 11: "2000"}),
        _padded(["2024/01/02", "小型臺指期貨", "投信"], 15, {9: "300", 11: "100"}),
        _padded(["2024/01/02", "小型臺指期貨", "外資"], 15, {9: "5000", 11: "7000"}),
    ]


def taifex_large_trader_rows() -> list[list[Any]]:
    """largeTraderFutDown: other contracts, then six TXF rows.

    TXF rows 2-5 are front month all/specific then all months all/specific;
    top-ten long at 7, short at 8, market OI at 9.
    """
    header = ["日期"] + [f"欄{i}" for i in range(1, 10)]

    def row(code: str, month: str, kind: str, long_oi: str, short_oi: str, market: str):
        return ["2024/01/02", code, "契約", month, kind, "0", "0", long_oi, short_oi, market]

    return [
        header,
        row("MXF", "202401", "0", "1", "1", "1"),
        row("TXF", "202401W2", "0", "10", "10", "100"),
        row("TXF", "202401W2", "1", "5", "5", "100"),
        row("TXF", "202401", "0", "40000", "35000", "90000"),
        row("TXF", "202401", "1", "30000", "31000", "90000"),
        row("TXF", "999999", "0", "52000", "44000", "110000"),
        row("TXF", "999999", "1", "38000", "36500", "110000"),
    ]


def taifex_no_data_html() -> bytes:
    return "<html><body><p>查無資料</p></body></html>".encode(LEGACY_ENCODING)
