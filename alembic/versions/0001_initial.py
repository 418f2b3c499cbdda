from __future__ import annotations

import sqlalchemy as sa

from alembic import op

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "tenant",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("legal_name", sa.String(length=200), nullable=True),
        sa.Column("tin", sa.String(length=20), nullable=True),
        sa.Column("currency", sa.String(length=3), nullable=False, server_default="LKR"),
        sa.Column("vat_registered", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("vat_number", sa.String(length=20), nullable=True),
        sa.Column("svat_registered", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("sscl_applicable", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("default_vat_rate", sa.Numeric(5, 4), nullable=False, server_default="0.15"),
        sa.Column("fiscal_year_start", sa.String(length=5), nullable=False, server_default="04-01"),
        sa.Column("invoice_prefix", sa.String(length=20), nullable=False, server_default="INV"),
        sa.Column("invoice_sequence", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("invoice_number_includes_year", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        # VAT and SVAT registration are mutually exclusive
        sa.CheckConstraint("NOT (vat_registered AND svat_registered)", name="ck_tenant_single_regime"),
    )
    op.create_table(
        "client",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("tenant_id", sa.Integer(), sa.ForeignKey("tenant.id"), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=32), nullable=True),
        sa.Column("tin", sa.String(length=20), nullable=True),
        sa.Column("vat_number", sa.String(length=20), nullable=True),
        sa.Column("registration_type", sa.String(length=10), nullable=False, server_default="none"),
    )
    op.create_index("ix_client_tenant_id", "client", ["tenant_id"])
    op.create_table(
        "svatvoucher",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("tenant_id", sa.Integer(), sa.ForeignKey("tenant.id"), nullable=False),
        sa.Column("voucher_number", sa.String(length=40), nullable=False),
        sa.Column("supplier_name", sa.String(length=200), nullable=True),
        sa.Column("voucher_value", sa.Numeric(14, 2), nullable=False),
        sa.Column("tax_amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="unused"),
        sa.Column("used_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_svatvoucher_tenant_id", "svatvoucher", ["tenant_id"])
    op.create_table(
        "invoice",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("tenant_id", sa.Integer(), sa.ForeignKey("tenant.id"), nullable=False),
        sa.Column("client_id", sa.Integer(), sa.ForeignKey("client.id"), nullable=True),
        sa.Column("invoice_number", sa.String(length=40), nullable=False),
        sa.Column("invoice_type", sa.String(length=20), nullable=False, server_default="tax_invoice"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="draft"),
        sa.Column("date_issued", sa.Date(), nullable=False),
        sa.Column("date_of_supply", sa.Date(), nullable=True),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("subtotal", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("total_discount", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("vat_amount", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("sscl_amount", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("total_tax", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("total", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("taxable_supplies", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("zero_rated_supplies", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("exempt_supplies", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("amount_paid", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("amount_due", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("client_snapshot", sa.JSON(), nullable=True),
        sa.Column("svat_voucher_id", sa.Integer(), sa.ForeignKey("svatvoucher.id"), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("paid_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("tenant_id", "invoice_number", name="uq_invoice_tenant_number"),
    )
    op.create_index("ix_invoice_tenant_id", "invoice", ["tenant_id"])
    op.create_index("ix_invoice_invoice_number", "invoice", ["invoice_number"])
    op.create_index("ix_invoice_status", "invoice", ["status"])
    op.create_table(
        "invoiceline",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("invoice_id", sa.Integer(), sa.ForeignKey("invoice.id"), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("description", sa.String(length=500), nullable=False),
        sa.Column("quantity", sa.Numeric(12, 3), nullable=False),
        sa.Column("unit_price", sa.Numeric(14, 2), nullable=False),
        sa.Column("discount", sa.Numeric(5, 4), nullable=False, server_default="0"),
        sa.Column("taxable", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("tax_category", sa.String(length=20), nullable=False, server_default="standard"),
        sa.Column("tax_rate", sa.Numeric(5, 4), nullable=False, server_default="0"),
        sa.Column("tax_amount", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("line_total", sa.Numeric(14, 2), nullable=False, server_default="0"),
    )
    op.create_index("ix_invoiceline_invoice_id", "invoiceline", ["invoice_id"])
    op.create_table(
        "payment",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("tenant_id", sa.Integer(), sa.ForeignKey("tenant.id"), nullable=False),
        sa.Column("invoice_id", sa.Integer(), sa.ForeignKey("invoice.id"), nullable=False),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("payment_method", sa.String(length=20), nullable=False, server_default="bank_transfer"),
        sa.Column("reference", sa.String(length=100), nullable=True),
        sa.Column("paid_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_payment_tenant_id", "payment", ["tenant_id"])
    op.create_index("ix_payment_invoice_id", "payment", ["invoice_id"])
    op.create_table(
        "trackingevent",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("invoice_id", sa.Integer(), sa.ForeignKey("invoice.id"), nullable=False),
        sa.Column("event_type", sa.String(length=20), nullable=False),
        sa.Column("ip", sa.String(length=64), nullable=True),
        sa.Column("user_agent", sa.String(length=500), nullable=True),
        sa.Column("referer", sa.String(length=500), nullable=True),
        sa.Column("redirect_url", sa.String(length=1000), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_trackingevent_invoice_id", "trackingevent", ["invoice_id"])


def downgrade() -> None:
    op.drop_table("trackingevent")
    op.drop_table("payment")
    op.drop_table("invoiceline")
    op.drop_table("invoice")
    op.drop_table("svatvoucher")
    op.drop_table("client")
    op.drop_table("tenant")
