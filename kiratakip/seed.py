"""Demo data loaded into a fresh store at startup (SEED_DEMO_DATA=true)."""

import logging
from datetime import datetime, timezone

from .schemas import ContractIn, LandlordIn, PaymentIn, PropertyIn, TenantIn
from .storage import MemStorage

logger = logging.getLogger(__name__)


def _d(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


LANDLORDS = [
    dict(name="Mehmet Öztürk", email="mehmet.ozturk@email.com", phone="+90 532 123 4567",
         national_id="12345678901", address="Beşiktaş, İstanbul",
         bank_account="TR33 0006 1005 1978 6457 8413 26", tax_number="1234567890"),
    dict(name="Fatma Yılmaz", email="fatma.yilmaz@email.com", phone="+90 533 234 5678",
         national_id="23456789012", address="Kadıköy, İstanbul",
         bank_account="TR64 0004 6007 8888 8006 2330 01", tax_number="2345678901"),
    dict(name="Ahmet Emlak A.Ş.", email="info@ahmetemlak.com", phone="+90 212 345 6789",
         national_id="34567890123", address="Şişli, İstanbul",
         bank_account="TR52 0001 2009 4520 0058 0015 02", tax_number="3456789012"),
    dict(name="Zeynep Koç", email="zeynep.koc@gmail.com", phone="+90 534 345 6789",
         national_id="45678901234", address="Çankaya, Ankara",
         bank_account="TR89 0001 5001 5800 7300 0135 64", tax_number="4567890123"),
]

TENANTS = [
    dict(name="Ali Demir", email="ali.demir@email.com", phone="+90 535 456 7890",
         national_id="56789012345", address="Beşiktaş, İstanbul",
         emergency_contact="Ayşe Demir", emergency_phone="+90 532 987 6543"),
    dict(name="Elif Kaya", email="elif.kaya@email.com", phone="+90 536 567 8901",
         national_id="67890123456", address="Kadıköy, İstanbul",
         emergency_contact="Murat Kaya", emergency_phone="+90 533 876 5432"),
    dict(name="Burak Şahin", email="burak.sahin@email.com", phone="+90 537 678 9012",
         national_id="78901234567", address="Şişli, İstanbul",
         emergency_contact="Seda Şahin", emergency_phone="+90 534 765 4321"),
    dict(name="Merve Yıldız", email="merve.yildiz@email.com", phone="+90 538 789 0123",
         national_id="89012345678", address="Çankaya, Ankara",
         emergency_contact="Can Yıldız", emergency_phone="+90 535 654 3210"),
    dict(name="Emre Arslan", email="emre.arslan@email.com", phone="+90 539 890 1234",
         national_id="90123456789", address="Konak, İzmir",
         emergency_contact="Deniz Arslan", emergency_phone="+90 536 543 2109"),
]

# landlord is an index into LANDLORDS
PROPERTIES = [
    dict(landlord=0, type="Daire", address="Barbaros Bulvarı No:45 D:8, Beşiktaş/İstanbul",
         monthly_rent="25000", deposit="50000", area=120, floor=8, has_balcony=True, has_parking=True,
         description="Deniz manzaralı, merkezi konumda 2+1 daire. Metro ve otobüs duraklarına yakın."),
    dict(landlord=1, type="Daire", address="Bağdat Caddesi No:123 D:4, Kadıköy/İstanbul",
         monthly_rent="22000", deposit="44000", area=100, floor=4, has_balcony=True, has_parking=False,
         description="Cadde üzeri, eşyalı 2+1 daire. Alışveriş merkezlerine yürüme mesafesi."),
    dict(landlord=2, type="Ofis", address="Büyükdere Caddesi No:78 Kat:12, Şişli/İstanbul",
         monthly_rent="45000", deposit="90000", area=200, floor=12, has_balcony=False, has_parking=True,
         description="Plaza içinde modern ofis. 24 saat güvenlik ve resepsiyon hizmeti."),
    dict(landlord=3, type="Daire", address="Tunalı Hilmi Caddesi No:67 D:6, Çankaya/Ankara",
         monthly_rent="18000", deposit="36000", area=110, floor=6, has_balcony=True, has_parking=True,
         description="Merkezi konumda 3+1 daire. Doğalgaz, asansör, güvenlik mevcut."),
    dict(landlord=0, type="Daire", address="Alsancak Mah. 1453 Sokak No:12 D:3, Konak/İzmir",
         monthly_rent="16000", deposit="32000", area=85, floor=3, has_balcony=True, has_parking=False,
         description="Denize yakın 2+1 daire. Klimalı, beyaz eşyalı."),
    dict(landlord=1, type="Dükkan", address="İstiklal Caddesi No:234, Beyoğlu/İstanbul",
         monthly_rent="35000", deposit="70000", area=60, floor=0, has_balcony=False, has_parking=False,
         description="Yoğun cadde üzeri dükkan. Yüksek insan trafiği, ticaret için ideal."),
]

# (landlord, tenant, property) are indexes into the lists above
CONTRACTS = [
    dict(refs=(0, 0, 0), monthly_rent="25000", deposit="50000", is_active=True,
         start_date=_d("2024-03-01"), end_date=_d("2025-03-01"),
         terms="12 aylık kira sözleşmesi. Kira ödemeleri her ayın 5'inde yapılacaktır. "
               "Depozito sözleşme bitiminde iade edilecektir."),
    dict(refs=(1, 1, 1), monthly_rent="22000", deposit="44000", is_active=True,
         start_date=_d("2024-01-15"), end_date=_d("2025-01-15"),
         terms="12 aylık kira sözleşmesi. Eşyalar kiracı sorumluluğundadır. "
               "Hasar durumunda onarım kiracıya aittir."),
    dict(refs=(2, 2, 2), monthly_rent="45000", deposit="90000", is_active=True,
         start_date=_d("2024-02-01"), end_date=_d("2026-02-01"),
         terms="24 aylık ticari kira sözleşmesi. KDV dahil değildir. Ofis kullanımı için uygundur."),
    dict(refs=(3, 3, 3), monthly_rent="18000", deposit="36000", is_active=True,
         start_date=_d("2024-04-01"), end_date=_d("2025-04-01"),
         terms="12 aylık kira sözleşmesi. Aidat ev sahibi tarafından ödenecektir. "
               "Doğalgaz faturası kiracıya aittir."),
    dict(refs=(0, 4, 4), monthly_rent="16000", deposit="32000", is_active=False,
         start_date=_d("2023-09-01"), end_date=_d("2024-09-01"),
         terms="12 aylık kira sözleşmesi tamamlandı. Sözleşme yenilenmedi."),
    dict(refs=(1, 0, 5), monthly_rent="35000", deposit="70000", is_active=False,
         start_date=_d("2024-06-01"), end_date=_d("2025-06-01"),
         terms="Ticari dükkan kirası. Kiracı tarafından erken feshedildi."),
]

# contract is an index into CONTRACTS; the tenant comes from the contract
PAYMENTS = [
    dict(contract=0, status="paid", amount="25000", due_date=_d("2024-09-05"), paid_date=_d("2024-09-04"),
         payment_method="Nakit", notes="Nakit ödeme - makbuz kesildi"),
    dict(contract=1, status="paid", amount="22000", due_date=_d("2024-09-05"), paid_date=_d("2024-09-20"),
         payment_method="EFT", notes="15 gün geç ödendi - gecikme faizi alınmadı"),
    dict(contract=0, status="paid", amount="25000", due_date=_d("2024-10-05"), paid_date=_d("2024-10-03"),
         payment_method="Banka Transferi", notes="Zamanında ödendi"),
    dict(contract=1, status="paid", amount="22000", due_date=_d("2024-10-05"), paid_date=_d("2024-10-07"),
         payment_method="EFT", notes="2 gün geç ödendi"),
    dict(contract=2, status="paid", amount="45000", due_date=_d("2024-10-01"), paid_date=_d("2024-09-28"),
         payment_method="Havale", notes="Erken ödeme yapıldı"),
    dict(contract=3, status="paid", amount="18000", due_date=_d("2024-10-05"), paid_date=_d("2024-10-05"),
         payment_method="Otomatik Ödeme", notes="Banka otomatik ödemesi"),
    dict(contract=0, status="paid", amount="25000", due_date=_d("2024-11-05"), paid_date=_d("2024-11-03"),
         payment_method="Banka Transferi", notes="Zamanında ödendi"),
    dict(contract=2, status="paid", amount="45000", due_date=_d("2024-11-01"), paid_date=_d("2024-10-30"),
         payment_method="Çek", notes="Erken ödeme - çek ile"),
    dict(contract=3, status="paid", amount="18000", due_date=_d("2024-11-05"), paid_date=_d("2024-11-05"),
         payment_method="Otomatik Ödeme", notes="Banka otomatik ödemesi"),
    dict(contract=1, status="overdue", amount="22000", due_date=_d("2024-11-05"),
         notes="Geç ödeme - kiracı ile iletişim kuruldu. 15 gün gecikme"),
    dict(contract=0, status="pending", amount="25000", due_date=_d("2024-12-05"),
         notes="Aralık ayı kirası - ödeme bekleniyor"),
    dict(contract=2, status="pending", amount="45000", due_date=_d("2024-12-01"),
         notes="Ofis kirası - vadesi geçti"),
    dict(contract=3, status="pending", amount="18000", due_date=_d("2024-12-05"),
         notes="Otomatik ödeme ayarlandı"),
]


def seed_demo_data(storage: MemStorage) -> None:
    """Insert the sample landlords, tenants, properties, contracts and payments."""
    landlords = [storage.create_landlord(LandlordIn(**data).model_dump()) for data in LANDLORDS]
    tenants = [storage.create_tenant(TenantIn(**data).model_dump()) for data in TENANTS]

    properties = []
    for data in PROPERTIES:
        data = PropertyIn(**data, landlord_id=landlords[data["landlord"]].id)
        properties.append(storage.create_property(data.model_dump()))

    contracts = []
    for data in CONTRACTS:
        landlord, tenant, prop = data["refs"]
        contracts.append(storage.create_contract(ContractIn(
            **data,
            landlord_id=landlords[landlord].id,
            tenant_id=tenants[tenant].id,
            property_id=properties[prop].id,
        ).model_dump()))

    for data in PAYMENTS:
        contract = contracts[data["contract"]]
        storage.create_payment(
            PaymentIn(**data, contract_id=contract.id, tenant_id=contract.tenant_id).model_dump()
        )

    logger.info(
        "Seeded demo data: %d landlords, %d tenants, %d properties, %d contracts, %d payments",
        len(landlords), len(tenants), len(properties), len(contracts), len(PAYMENTS),
    )
