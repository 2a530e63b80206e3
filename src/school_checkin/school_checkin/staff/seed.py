"""Default staff list and date-driven role promotions."""

from datetime import date

from .model import RolePromotion, StaffMember

DEFAULT_STAFF_LIST: tuple[StaffMember, ...] = (
    StaffMember("PJ001", "นางชัชตะวัน สีเขียว", "ผู้อำนวยการ"),
    StaffMember("PJ002", "นายภราดร คัณทักษ์", "รองผู้อำนวยการ"),
    StaffMember("PJ003", "นางทิวาวรรณ กองแก้ว", "ครูชำนาญการพิเศษ"),
    StaffMember("PJ004", "นายบุญจันทร์ สุวรรณพรม", "ครูชำนาญการพิเศษ"),
    StaffMember("PJ005", "นายอภิชาติ ชุมพล", "ครูชำนาญการพิเศษ"),
    StaffMember("PJ006", "นายภาคภูมิ พงษ์สิทธิศักดิ์", "ครูชำนาญการพิเศษ"),
    StaffMember("PJ007", "นางวัชรี พิมพ์ศรี", "ครูชำนาญการพิเศษ"),
    StaffMember("PJ008", "นางบุญญาภรณ์ ธิตานนท์", "ครูชำนาญการพิเศษ"),
    StaffMember("PJ009", "นางสาวอัญชนีย์ วงศ์วาน", "ครูชำนาญการพิเศษ"),
    StaffMember("PJ010", "นางวลัยรัตน์ แนวบุตร", "ครูชำนาญการพิเศษ"),
    StaffMember("PJ011", "นายยุทธไกร อ่างแก้ว", "ครูชำนาญการพิเศษ"),
    StaffMember("PJ012", "นางสาวเสาวภา สิงหเสนา", "ครูชำนาญการพิเศษ"),
    StaffMember("PJ013", "นางสาวกันต์ฤทัย นามมาลา", "ครูชำนาญการ"),
    StaffMember("PJ014", "นางสาวสุภาภรณ์ ลัพธะลักษ์", "ครูชำนาญการ"),
    StaffMember("PJ015", "นายจักรพงษ์ ไชยราช", "ครู"),
    StaffMember("PJ016", "ว่าที่ ร.ต.วิษณุ โสภา", "ครู"),
    StaffMember("PJ017", "นายบุญเสริม สาทไทสงค์", "ครู"),
    StaffMember("PJ018", "นายอุดมวิทย์ บุพิ", "ครู"),
    StaffMember("PJ019", "นายพงษ์เพชร แซ่ตั้ง", "ครู"),
    StaffMember("PJ020", "นางสาวชลฎา บุตรเนียน", "ครูผู้ช่วย"),
    StaffMember("PJ021", "นางสาวปภัสพ์มณ ทองอาสา", "ครูผู้ช่วย"),
    StaffMember("PJ022", "นายศราวุธ ศรีวงราช", "ลูกจ้างประจำ"),
    StaffMember("PJ023", "นางสาวตรีนัทธิ์ธนา บุญโท", "ครูธุรการ"),
    StaffMember("PJ024", "นางสาวศิรินภา นาแว่น", "ครูอัตราจ้าง"),
    StaffMember("PJ025", "นายวชิรวิทย์ นันทชัย", "ครูอัตราจ้าง"),
)

# Sample data: an assistant teacher becomes a full teacher after the probation period.
ROLE_PROMOTIONS: tuple[RolePromotion, ...] = (
    RolePromotion(staff_id="PJ020", role="ครู", effective_from=date(2026, 5, 1)),
)
