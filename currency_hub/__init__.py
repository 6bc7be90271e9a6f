"""Currency Hub: конвертация валют по курсам ExchangeRate-API.

Курсы берутся из API, при неудаче из локального снимка,
а при его отсутствии из встроенной таблицы.
"""
