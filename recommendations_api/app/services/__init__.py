"""
Service layer.

Services own connections and transaction boundaries and translate
store results into domain errors; endpoints stay free of SQL.
"""
