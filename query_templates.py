# query_templates.py
# Fixed catalog queries. Placeholders are filled by sql_builder with already
# lowercased identifiers; nothing here is parameter-bound.

CATALOG_COLUMNS = "schemaname, tablename, tableowner, tablespace, hasindexes, hasrules, hastriggers"

TEMPLATES = {
    # every user table, optionally restricted to one schema
    "tables": """SELECT {columns}
FROM pg_catalog.pg_tables
WHERE schemaname != 'pg_catalog'
AND schemaname != 'information_schema'
{schema_clause};""",

    # one row of pg_tables for a single table
    "table_details": """SELECT {columns}
FROM pg_catalog.pg_tables
WHERE LOWER(schemaname) = '{schema}'
AND LOWER(tablename) = '{name}';""",

    # per column: name, position, nullability, type, length, primary-key membership
    "table_structure": """SELECT t.column_name,
       t.ordinal_position,
       t.is_nullable,
       t.data_type,
       t.character_maximum_length,
       (kcu.column_name IS NOT NULL) AS is_pk
FROM information_schema.columns t
LEFT JOIN information_schema.table_constraints tc
       ON tc.table_catalog = t.table_catalog
      AND tc.table_schema = t.table_schema
      AND tc.table_name = t.table_name
      AND tc.constraint_type = 'PRIMARY KEY'
LEFT JOIN information_schema.key_column_usage kcu
       ON kcu.table_catalog = tc.table_catalog
      AND kcu.table_schema = tc.table_schema
      AND kcu.table_name = tc.table_name
      AND kcu.constraint_name = tc.constraint_name
      AND kcu.column_name = t.column_name
WHERE LOWER(t.table_schema) = '{schema}'
AND LOWER(t.table_name) = '{name}'
ORDER BY t.ordinal_position;""",

    "select": 'SELECT {columns}\nFROM "{schema}"."{name}"\n{where_clause}',

    "delete": 'DELETE FROM "{schema}"."{name}"\n{where_clause}',

    "insert": "INSERT INTO {schema}.{name} ({columns}) VALUES {values};",
}
