# nextstarter/orm_templates.py
"""
File templates written into the generated project for each ORM.

The Prisma variant writes a relational schema (``prisma/schema.prisma``).
The Drizzle variant writes a query-builder schema (``drizzle/schema.ts``)
plus ``drizzle.config.ts``. Both write a database-client module at
``src/lib/db.ts``.

Templates are assembled from lists of short lines and joined with newlines
so each line stays readable in the source.
"""

from __future__ import annotations

from typing import Dict, List

from nextstarter.models import Orm

__all__ = ["orm_files", "DB_CLIENT_PATH"]

DB_CLIENT_PATH = "src/lib/db.ts"

# ---------------------------------------------------------------------------
# Prisma
# ---------------------------------------------------------------------------


def _prisma_schema_lines() -> List[str]:
    return [
        "datasource db {",
        '  provider = "postgresql"',
        '  url      = env("DATABASE_URL")',
        "}",
        "",
        "generator client {",
        '  provider = "prisma-client-js"',
        "}",
        "",
        "model User {",
        "  id            String    @id @default(cuid())",
        "  name          String?",
        "  email         String?   @unique",
        "  emailVerified DateTime?",
        "  image         String?",
        "  accounts      Account[]",
        "  sessions      Session[]",
        "}",
        "",
        "model Account {",
        "  id                String  @id @default(cuid())",
        "  userId            String",
        "  type              String",
        "  provider          String",
        "  providerAccountId String",
        "  refresh_token     String? @db.Text",
        "  access_token      String? @db.Text",
        "  expires_at        Int?",
        "  token_type        String?",
        "  scope             String?",
        "  id_token          String? @db.Text",
        "  session_state     String?",
        "  user              User    @relation(fields: [userId], references: [id], onDelete: Cascade)",
        "",
        "  @@unique([provider, providerAccountId])",
        "}",
        "",
        "model Session {",
        "  id           String   @id @default(cuid())",
        "  sessionToken String   @unique",
        "  userId       String",
        "  expires      DateTime",
        "  user         User     @relation(fields: [userId], references: [id], onDelete: Cascade)",
        "}",
        "",
    ]


def _prisma_client_lines() -> List[str]:
    return [
        "import { PrismaClient } from '@prisma/client'",
        "",
        "const globalForPrisma = globalThis as unknown as {",
        "  prisma: PrismaClient | undefined",
        "}",
        "",
        "export const prisma = globalForPrisma.prisma ?? new PrismaClient()",
        "",
        "if (process.env.NODE_ENV !== 'production') globalForPrisma.prisma = prisma",
        "",
    ]


# ---------------------------------------------------------------------------
# Drizzle
# ---------------------------------------------------------------------------


def _drizzle_schema_lines() -> List[str]:
    return [
        "import { sqliteTable, text, integer } from 'drizzle-orm/sqlite-core';",
        "",
        "export const users = sqliteTable('users', {",
        "  id: text('id').primaryKey(),",
        "  name: text('name'),",
        "  email: text('email').unique(),",
        "  emailVerified: integer('emailVerified', { mode: 'timestamp_ms' }),",
        "  image: text('image'),",
        "});",
        "",
        "export const accounts = sqliteTable('accounts', {",
        "  id: text('id').primaryKey(),",
        "  userId: text('userId').notNull().references(() => users.id, { onDelete: 'cascade' }),",
        "  type: text('type').notNull(),",
        "  provider: text('provider').notNull(),",
        "  providerAccountId: text('providerAccountId').notNull(),",
        "  refresh_token: text('refresh_token'),",
        "  access_token: text('access_token'),",
        "  expires_at: integer('expires_at'),",
        "  token_type: text('token_type'),",
        "  scope: text('scope'),",
        "  id_token: text('id_token'),",
        "  session_state: text('session_state'),",
        "});",
        "",
        "export const sessions = sqliteTable('sessions', {",
        "  id: text('id').primaryKey(),",
        "  sessionToken: text('sessionToken').notNull().unique(),",
        "  userId: text('userId').notNull().references(() => users.id, { onDelete: 'cascade' }),",
        "  expires: integer('expires', { mode: 'timestamp_ms' }).notNull(),",
        "});",
        "",
    ]


def _drizzle_client_lines() -> List[str]:
    return [
        "import { drizzle } from 'drizzle-orm/libsql';",
        "import { createClient } from '@libsql/client';",
        "",
        "const client = createClient({",
        "  url: process.env.DATABASE_URL!,",
        "  authToken: process.env.DATABASE_AUTH_TOKEN,",
        "});",
        "",
        "export const db = drizzle(client);",
        "",
    ]


def _drizzle_config_lines() -> List[str]:
    return [
        "import type { Config } from 'drizzle-kit';",
        "",
        "export default {",
        "  schema: './drizzle/schema.ts',",
        "  out: './drizzle/migrations',",
        "  driver: 'turso',",
        "  dbCredentials: {",
        "    url: process.env.DATABASE_URL!,",
        "    authToken: process.env.DATABASE_AUTH_TOKEN!,",
        "  },",
        "} satisfies Config;",
        "",
    ]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def orm_files(orm: Orm) -> Dict[str, str]:
    """Return ``{relative path: file content}`` for ``orm``.

    ``Orm.NONE`` yields an empty mapping.
    """
    if orm is Orm.PRISMA:
        return {
            "prisma/schema.prisma": "\n".join(_prisma_schema_lines()),
            DB_CLIENT_PATH: "\n".join(_prisma_client_lines()),
        }
    if orm is Orm.DRIZZLE:
        return {
            "drizzle/schema.ts": "\n".join(_drizzle_schema_lines()),
            "drizzle.config.ts": "\n".join(_drizzle_config_lines()),
            DB_CLIENT_PATH: "\n".join(_drizzle_client_lines()),
        }
    return {}
