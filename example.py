from datetime import date

from nbp_kantor import NbpKantor

print(NbpKantor.__version__)  # 0.1.0

kantor = NbpKantor()

# Today's rates (no stepping back)
print(kantor.today_rates().to_dict())

# A Saturday: step back to Friday's table
weekend = kantor.exchange_rates(date(2024, 8, 3), max_days_to_check=7)
print(weekend.effective_date)  # 2024-08-02

# Calculator
print(kantor.convert(250, "USD", "EUR", weekend))
print(kantor.exchange_rate_info("EUR", "PLN", weekend))
