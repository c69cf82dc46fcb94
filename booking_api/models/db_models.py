from sqlalchemy import Column, Integer, MetaData, String, Table

metadata = MetaData()

bookings = Table(
    "bookings",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("time", String, nullable=False),
    Column("name", String, nullable=False),
    Column("room_number", String, nullable=False),
    Column("number_of_people", Integer, nullable=False),
)
