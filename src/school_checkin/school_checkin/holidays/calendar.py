"""Static holiday tables.

FIXED_HOLIDAYS repeats every year (keyed by MM-DD). DYNAMIC_HOLIDAYS holds the
lunar-calendar and substitution days announced per year; a year missing from
the table simply has no dynamic holidays.
"""

FIXED_HOLIDAYS: dict[str, str] = {
    "01-01": "วันขึ้นปีใหม่",
    "04-06": "วันจักรี",
    "04-13": "วันสงกรานต์",
    "04-14": "วันสงกรานต์",
    "04-15": "วันสงกรานต์",
    "05-01": "วันแรงงานแห่งชาติ",
    "05-04": "วันฉัตรมงคล",
    "06-03": "วันเฉลิมพระชนมพรรษาพระราชินี",
    "07-28": "วันเฉลิมพระชนมพรรษาในหลวง ร.10",
    "08-12": "วันแม่แห่งชาติ",
    "10-13": "วันนวมินทรมหาราช",
    "10-23": "วันปิยมหาราช",
    "12-05": "วันพ่อแห่งชาติ",
    "12-10": "วันรัฐธรรมนูญ",
    "12-31": "วันสิ้นปี",
}

DYNAMIC_HOLIDAYS: dict[int, dict[str, str]] = {
    2025: {
        "02-12": "วันมาฆบูชา",
        "04-07": "วันหยุดชดเชยวันจักรี",
        "04-16": "วันหยุดชดเชยวันสงกรานต์",
        "05-05": "วันหยุดชดเชยวันฉัตรมงคล",
        "05-11": "วันวิสาขบูชา",
        "05-12": "วันหยุดชดเชยวันวิสาขบูชา",
        "07-10": "วันอาสาฬหบูชา",
        "07-11": "วันเข้าพรรษา",
    },
    2026: {
        "03-03": "วันมาฆบูชา",
        "04-06": "วันจักรี",
        "05-26": "วันวิสาขบูชา",
        "07-29": "วันอาสาฬหบูชา",
        "07-30": "วันเข้าพรรษา",
    },
}
