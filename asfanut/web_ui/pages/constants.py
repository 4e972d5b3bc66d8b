"""Web UI ページ用の定数・文言。"""
from __future__ import annotations

STORE_TAGLINE = "אוסף בולים ומטבעות נדירים ואותנטיים"

API_KEY_GUIDE_MARKDOWN = """
המערכת דורשת מפתח API פעיל כדי לבצע זיהוי תמונות והערכת שווי.
[לחץ כאן להנפקת מפתח בחינם](https://aistudio.google.com/app/apikey)
"""

TERMS_LABEL = (
    "אני מאשר כי קראתי את תנאי השימוש, הצהרת הנגישות ומדיניות הפרטיות, "
    "וכי כל המידע המוזן הוא נכון ומדויק."
)

PRODUCT_WARNING = (
    "**שים לב:** הרכישה על אחריות הקונה בלבד. עליך לאמת את המטבע/הבול בתיאום מראש. "
    "המערכת מספקת הערכה ממוחשבת בלבד."
)

ANALYSIS_DISCLAIMER = (
    "המערכת מספקת הערכה ממוחשבת בלבד. הרכישה על אחריות הקונה ועליו האחריות "
    "לאמת את המטבע/הבול בתיאום מראש."
)

FOOTER_DISCLAIMER_MARKDOWN = """
**דיסקליימר משפטי והצהרת אחריות**

כל המידע המוצג באתר זה, לרבות הערכות מצב ושווי פריטים, מבוסס על ניתוח בינה מלאכותית (AI)
ואינו מהווה חוות דעת של שמאי מוסמך. רכישת הפריטים הינה על אחריות הקונה בלבד.
על הקונה מוטלת האחריות המלאה לאמת את מקוריות המטבע/הבול, מצבו וערכו בבדיקה פיזית לפני ביצוע התשלום.
החנות ובעליה אינם אחראים לכל אי-התאמה בין התיאור הממוחשב למצב בפועל.
"""

LEGAL_MARKDOWN = """
### תנאי שימוש

השימוש באתר ובשירותי ההערכה הממוחשבת כפוף לתנאים אלה. ההערכות המוצגות הן הערכות
אוטומטיות בלבד ואינן מהוות חוות דעת מקצועית או התחייבות למחיר.

### מדיניות פרטיות

פרטי הקשר של החנות מוצגים לצורך יצירת קשר בלבד. תמונות הפריטים נשלחות לשירות
ניתוח תמונה חיצוני (Google Gemini) לצורך זיהוי והערכה.

### הצהרת נגישות

אנו פועלים להנגשת האתר לכלל המשתמשים. אם נתקלתם בבעיית נגישות, אנא פנו אלינו
בפרטי הקשר המופיעים בעמוד החנות.
"""

RTL_CSS = """
<style>
.stApp { direction: rtl; }
.stApp input, .stApp textarea { direction: rtl; text-align: right; }
</style>
"""
